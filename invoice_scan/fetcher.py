from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import ParseResult, urlparse
from urllib.request import url2pathname

import requests

from .errors import AcquisitionFailure

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_MAX_BYTES = 25 * 1024 * 1024  # 25MB
CHUNK_SIZE = 64 * 1024


def fetch_document(
    url: str,
    timeout: float | None = DEFAULT_FETCH_TIMEOUT,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
) -> bytes:
    """Read the whole document behind ``url`` into memory.

    ``http(s)://`` URLs are downloaded with requests, ``file://`` URLs are
    read from the local filesystem. Every failure is raised as
    ``AcquisitionFailure`` with the underlying detail in its message.
    """
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise AcquisitionFailure(f"Malformed URL {url!r}: {exc}") from exc

    scheme = parsed.scheme.lower()
    if scheme in {"http", "https"}:
        data = _fetch_http(url, timeout, max_bytes)
    elif scheme == "file":
        data = _read_file(parsed, max_bytes)
    elif not scheme:
        raise AcquisitionFailure(f"Malformed URL {url!r}: no scheme")
    else:
        raise AcquisitionFailure(f"Unsupported URL scheme {scheme!r} in {url!r}")

    logger.debug("fetched %d bytes from %s", len(data), url)
    return data


def _fetch_http(url: str, timeout: float | None, max_bytes: int | None) -> bytes:
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            declared = response.headers.get("Content-Length")
            if max_bytes is not None and declared and declared.isdigit() and int(declared) > max_bytes:
                raise AcquisitionFailure(
                    f"Document at {url} is too large: {declared} bytes (limit {max_bytes})"
                )
            return _read_limited(response.iter_content(chunk_size=CHUNK_SIZE), max_bytes, url)
    except requests.RequestException as exc:
        raise AcquisitionFailure(f"Failed to download {url}: {exc}") from exc


def _read_file(parsed: ParseResult, max_bytes: int | None) -> bytes:
    if parsed.netloc not in {"", "localhost"}:
        raise AcquisitionFailure(f"Remote file URLs are not supported: {parsed.geturl()}")
    path = Path(url2pathname(parsed.path))
    try:
        with path.open("rb") as fh:
            return _read_limited(iter(lambda: fh.read(CHUNK_SIZE), b""), max_bytes, str(path))
    except (OSError, ValueError) as exc:
        # ValueError: the decoded path holds a NUL byte.
        raise AcquisitionFailure(f"Failed to read {path}: {exc}") from exc


def _read_limited(chunks: Iterable[bytes], max_bytes: int | None, source: str) -> bytes:
    buf = bytearray()
    for chunk in chunks:
        if not chunk:
            continue
        buf.extend(chunk)
        if max_bytes is not None and len(buf) > max_bytes:
            raise AcquisitionFailure(f"Document at {source} exceeds the {max_bytes} byte limit")
    return bytes(buf)
