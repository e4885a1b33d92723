from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ACCEPTED_MESSAGE = "PDF is valid - no blacklisted IBAN found."


@dataclass(frozen=True)
class ScanRequest:
    url: str


@dataclass(frozen=True)
class ScanOutcome:
    rejected: bool
    message: str

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("ScanOutcome.message must not be empty")

    @classmethod
    def accepted(cls, message: str = ACCEPTED_MESSAGE) -> "ScanOutcome":
        return cls(rejected=False, message=message)

    @classmethod
    def rejected_with(cls, message: str) -> "ScanOutcome":
        return cls(rejected=True, message=message)

    def as_dict(self) -> dict[str, Any]:
        return {
            "foundBlacklistedIban": self.rejected,
            "message": self.message,
        }
