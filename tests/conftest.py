from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

BLACKLISTED_IBAN = "DE15 3006 0601 0505 7807 80"


def write_pdf(path: Path, pages: list[list[str]]) -> Path:
    c = canvas.Canvas(str(path), pagesize=letter)
    _, height = letter
    for lines in pages:
        c.setFont("Helvetica", 11)
        y = height - 72
        for line in lines:
            c.drawString(72, y, line)
            y -= 16
        c.showPage()
    c.save()
    return path


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str, *pages: list[str]) -> Path:
        return write_pdf(tmp_path / name, list(pages) or [[]])

    return _make


@pytest.fixture
def iban_pdf(make_pdf) -> Path:
    return make_pdf(
        "invoice_iban.pdf",
        ["Invoice 2024-0042", "Total 100 EUR"],
        [f"Pay to {BLACKLISTED_IBAN} now"],
    )


@pytest.fixture
def clean_pdf(make_pdf) -> Path:
    return make_pdf("invoice_clean.pdf", ["Invoice total 100 EUR", "Pay to DE89 3704 0044 0532 0130 00"])


@pytest.fixture
def blank_pdf(make_pdf) -> Path:
    return make_pdf("blank.pdf", [])
