from __future__ import annotations


class ScanFailure(Exception):
    """A failure that ends the scan before a decision can be made."""

    category = "processing_failure"


class AcquisitionFailure(ScanFailure):
    """The document could not be fetched (bad URL, network, HTTP or file error)."""

    category = "acquisition_failure"


class FormatFailure(ScanFailure):
    """The fetched bytes could not be read as a PDF."""

    category = "format_failure"


class EmptyContentFailure(ScanFailure):
    """Extraction produced no text at all."""

    category = "empty_content_failure"
