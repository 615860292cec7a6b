"""Root of the crate-report exception hierarchy."""

from typing import Dict, Optional


class CrateReportError(Exception):
    """Any error crate-report raises deliberately.

    ``details`` holds structured context such as paths and line numbers. A
    ``reason`` entry is shown right after the message; the rest is listed
    in parentheses.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = dict(details or {})

    def __str__(self) -> str:
        text = self.message
        reason = self.details.get("reason")
        if reason:
            text = f"{text}: {reason}"
        context = [f"{key}={value}" for key, value in self.details.items() if key != "reason"]
        if context:
            text = f"{text} ({', '.join(context)})"
        return text
