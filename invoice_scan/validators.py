"""Secondary validation predicates run on the extracted text.

A validator returns ``True`` when the document passes. Failing any validator
rejects the document the same way a denylist hit does.
"""

from __future__ import annotations

from collections.abc import Callable

Validator = Callable[[str], bool]


def always_valid(text: str) -> bool:
    return True


def all_of(*validators: Validator) -> Validator:
    if not validators:
        return always_valid

    def _check(text: str) -> bool:
        return all(validator(text) for validator in validators)

    return _check


def require_terms(*terms: str) -> Validator:
    """Pass only if every term occurs in the text (case-sensitive)."""
    wanted = [t for t in terms if t]

    def _check(text: str) -> bool:
        return all(term in text for term in wanted)

    return _check
