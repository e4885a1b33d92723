from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

# IBANs are matched exactly as written here, grouping spaces included.
DEFAULT_DENYLIST: tuple[str, ...] = ("DE15 3006 0601 0505 7807 80",)


def find_denylisted(text: str, entries: Iterable[str]) -> list[str]:
    """Return the entries that occur verbatim in ``text``, in denylist order."""
    return [entry for entry in entries if entry and entry in text]


def load_denylist(path: str | Path) -> tuple[str, ...]:
    """Load denylist entries from a JSON or YAML file.

    The file holds either a list of strings or a mapping with an ``ibans``
    list. Entries are only stripped of surrounding whitespace; internal
    spacing is kept because matching is exact.
    """
    payload = _load_file(path)
    if isinstance(payload, dict):
        payload = payload.get("ibans", [])
    if not isinstance(payload, list):
        raise ValueError(f"Denylist file {path} must contain a list or an 'ibans' mapping")
    return _dedupe(value for value in payload if isinstance(value, str))


def _load_file(path: str | Path) -> Any:
    data = Path(path).read_text(encoding="utf-8")
    suffix = Path(path).suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in denylist file {path}: {exc}") from exc
    return json.loads(data)


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        value = item.strip()
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return tuple(out)
