from __future__ import annotations

import io
import logging

from pypdf import PasswordType, PdfReader

from .errors import FormatFailure

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n"


def extract_text(data: bytes) -> str:
    """Return the visible text of every page, in page order, as one string."""
    return PAGE_SEPARATOR.join(extract_pages(data))


def extract_pages(data: bytes) -> list[str]:
    reader = _open_reader(data)
    pages: list[str] = []
    try:
        for page in reader.pages:
            pages.append(page.extract_text() or "")
    except Exception as exc:
        raise FormatFailure(f"Failed to extract text from PDF page {len(pages) + 1}: {exc}") from exc

    logger.debug("extracted %d page(s), %d chars", len(pages), sum(len(p) for p in pages))
    return pages


def _open_reader(data: bytes) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(data))
    except Exception as exc:
        raise FormatFailure(f"Failed to parse PDF: {exc}") from exc

    if reader.is_encrypted:
        # Owner-password-only documents open with an empty user password.
        try:
            result = reader.decrypt("")
        except Exception as exc:
            raise FormatFailure(f"Failed to decrypt PDF: {exc}") from exc
        if result == PasswordType.NOT_DECRYPTED:
            raise FormatFailure("PDF is encrypted and requires a password")
    return reader
