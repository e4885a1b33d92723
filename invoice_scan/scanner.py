from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Mapping

from .denylist import DEFAULT_DENYLIST, find_denylisted, load_denylist
from .errors import EmptyContentFailure, FormatFailure, ScanFailure
from .fetcher import DEFAULT_FETCH_TIMEOUT, DEFAULT_MAX_BYTES, fetch_document
from .pdf_text import extract_text
from .types import ScanOutcome, ScanRequest
from .validators import Validator, always_valid

logger = logging.getLogger(__name__)

EMPTY_CONTENT_MESSAGE = "PDF content is empty."
REJECTED_IBAN_MESSAGE = "Validation failed: blacklisted IBAN found."
REJECTED_VALIDATION_MESSAGE = "Validation failed: additional validation rejected the document."
REJECTED_BOTH_MESSAGE = (
    "Validation failed: blacklisted IBAN found and additional validation rejected the document."
)

ENV_DENYLIST = "INVOICE_SCAN_DENYLIST"
ENV_FETCH_TIMEOUT = "INVOICE_SCAN_FETCH_TIMEOUT"
ENV_MAX_BYTES = "INVOICE_SCAN_MAX_BYTES"
ENV_EXTRACT_TIMEOUT = "INVOICE_SCAN_EXTRACT_TIMEOUT"

EXTRACT_WORKERS = 4
EXTRACT_THREAD_PREFIX = "invoice-scan-extract"

# At most EXTRACT_WORKERS extractions run at once, timed-out ones included.
_EXTRACT_POOL = ThreadPoolExecutor(max_workers=EXTRACT_WORKERS, thread_name_prefix=EXTRACT_THREAD_PREFIX)


@dataclass(frozen=True)
class ScannerConfig:
    denylist: tuple[str, ...] = DEFAULT_DENYLIST
    fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT
    max_bytes: int | None = DEFAULT_MAX_BYTES
    extract_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ScannerConfig":
        """Build a config from ``INVOICE_SCAN_*`` environment variables.

        Unset variables keep the defaults; a non-positive number disables the
        corresponding limit. Invalid values raise ``ValueError`` naming the
        variable.
        """
        env = os.environ if environ is None else environ
        return cls(
            denylist=_env_denylist(env),
            fetch_timeout=_env_limit(env, ENV_FETCH_TIMEOUT, float, DEFAULT_FETCH_TIMEOUT),
            max_bytes=_env_limit(env, ENV_MAX_BYTES, int, DEFAULT_MAX_BYTES),
            extract_timeout=_env_limit(env, ENV_EXTRACT_TIMEOUT, float, None),
        )


class InvoiceScanner:
    def __init__(self, config: ScannerConfig | None = None, validator: Validator | None = None) -> None:
        self.config = config or ScannerConfig()
        self.validator = validator or always_valid

    def scan(self, request: str | ScanRequest) -> ScanOutcome:
        """Fetch the PDF at the request URL and classify it.

        Returns the outcome for accepted and rejected documents. Raises a
        ``ScanFailure`` subclass when the document cannot be fetched, parsed
        or yields no text.
        """
        url = request.url if isinstance(request, ScanRequest) else request
        try:
            data = fetch_document(url, timeout=self.config.fetch_timeout, max_bytes=self.config.max_bytes)
            text = self._extract(data)
            outcome = self.scan_text(text)
        except ScanFailure as exc:
            logger.warning("scan of %s failed (%s): %s", url, exc.category, exc)
            raise
        logger.info("scan of %s finished: rejected=%s", url, outcome.rejected)
        return outcome

    def scan_text(self, text: str) -> ScanOutcome:
        if len(text) == 0:
            raise EmptyContentFailure(EMPTY_CONTENT_MESSAGE)

        matched = find_denylisted(text, self.config.denylist)
        other_valid = bool(self.validator(text))
        logger.debug("denylist hits=%d, other validation passed=%s", len(matched), other_valid)

        if matched and not other_valid:
            return ScanOutcome.rejected_with(REJECTED_BOTH_MESSAGE)
        if matched:
            return ScanOutcome.rejected_with(REJECTED_IBAN_MESSAGE)
        if not other_valid:
            return ScanOutcome.rejected_with(REJECTED_VALIDATION_MESSAGE)
        return ScanOutcome.accepted()

    def _extract(self, data: bytes) -> str:
        timeout = self.config.extract_timeout
        if timeout is None:
            return extract_text(data)

        future = _EXTRACT_POOL.submit(extract_text, data)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            future.cancel()
            raise FormatFailure(f"Text extraction timed out after {timeout}s") from exc


def _env_denylist(env: Mapping[str, str]) -> tuple[str, ...]:
    path = env.get(ENV_DENYLIST, "").strip()
    if not path:
        return DEFAULT_DENYLIST
    try:
        return load_denylist(path)
    except (OSError, ValueError) as exc:
        raise ValueError(f"{ENV_DENYLIST}={path!r} could not be loaded: {exc}") from exc


def _env_limit(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    return value if value > 0 else None
