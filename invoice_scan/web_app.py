from __future__ import annotations

import logging
import os

from flask import Flask, jsonify, request

from .errors import ScanFailure
from .logging_setup import configure_logging
from .scanner import InvoiceScanner, ScannerConfig

logger = logging.getLogger(__name__)

MISSING_URL_MESSAGE = "Error: missing required query parameter 'url'"


def _envelope(found_blacklisted_iban: bool, message: str) -> dict[str, object]:
    return {"foundBlacklistedIban": found_blacklisted_iban, "message": message}


def create_app(scanner: InvoiceScanner | None = None) -> Flask:
    app = Flask(__name__)
    app.config["INVOICE_SCANNER"] = scanner or InvoiceScanner(ScannerConfig.from_env())

    @app.get("/scan")
    @app.get("/api/v1/invoice-scan")
    def scan():
        url = request.args.get("url", "").strip()
        if not url:
            logger.info("scan request without url parameter from %s", request.remote_addr)
            return jsonify(_envelope(False, MISSING_URL_MESSAGE)), 400

        invoice_scanner: InvoiceScanner = app.config["INVOICE_SCANNER"]
        try:
            outcome = invoice_scanner.scan(url)
        except ScanFailure as exc:
            return jsonify(_envelope(False, f"Error: {exc}")), 500

        status = 400 if outcome.rejected else 200
        return jsonify(outcome.as_dict()), status

    return app


app = create_app()


if __name__ == "__main__":
    configure_logging(os.environ.get("INVOICE_SCAN_LOG_LEVEL", "INFO"))
    app.run(host="127.0.0.1", port=5000, debug=False)
