from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from urllib.parse import urlparse

from .denylist import DEFAULT_DENYLIST, load_denylist
from .errors import ScanFailure
from .fetcher import DEFAULT_FETCH_TIMEOUT, DEFAULT_MAX_BYTES
from .logging_setup import configure_logging
from .scanner import InvoiceScanner, ScannerConfig
from .validators import require_terms

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invoice-scan",
        description="Fetch a PDF invoice and reject it if it contains a blacklisted IBAN.",
    )
    parser.add_argument("url", help="URL of the PDF (http, https or file). A local path is also accepted.")
    parser.add_argument("--denylist", help="Path to JSON/YAML file with blacklisted IBANs.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_FETCH_TIMEOUT,
        help=f"Download timeout in seconds (default: {DEFAULT_FETCH_TIMEOUT:g}).",
    )
    parser.add_argument(
        "--extract-timeout",
        type=float,
        default=None,
        help="Give up on text extraction after this many seconds (default: no limit).",
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=DEFAULT_MAX_BYTES,
        help=f"Maximum document size in bytes (default: {DEFAULT_MAX_BYTES}).",
    )
    parser.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="TERM",
        help="Reject the document unless TERM appears in its text. May be repeated.",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON output.")
    parser.add_argument("--log-level", default="ERROR", help="Logging level (default: ERROR).")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        denylist = load_denylist(args.denylist) if args.denylist else DEFAULT_DENYLIST
    except (OSError, ValueError) as exc:
        _emit_error(f"Failed to load denylist: {exc}", as_json=args.json)
        return EXIT_FAILURE

    config = ScannerConfig(
        denylist=denylist,
        fetch_timeout=args.timeout,
        max_bytes=args.max_bytes,
        extract_timeout=args.extract_timeout,
    )
    validator = require_terms(*args.require) if args.require else None
    scanner = InvoiceScanner(config, validator=validator)

    try:
        outcome = scanner.scan(to_url(args.url))
    except ScanFailure as exc:
        _emit_error(str(exc), as_json=args.json)
        return EXIT_FAILURE

    if args.json:
        print(json.dumps(outcome.as_dict(), ensure_ascii=False, indent=2))
    else:
        label = "REJECTED" if outcome.rejected else "ACCEPTED"
        print(f"{label}: {outcome.message}")
    return EXIT_REJECTED if outcome.rejected else EXIT_ACCEPTED


def to_url(value: str) -> str:
    """Turn a plain filesystem path into a ``file://`` URL; leave URLs alone."""
    scheme = urlparse(value).scheme
    if scheme and len(scheme) > 1:
        return value
    return Path(value).resolve().as_uri()


def _emit_error(message: str, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"foundBlacklistedIban": False, "message": f"Error: {message}"}, ensure_ascii=False))
    else:
        print(f"Error: {message}", file=sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())
