from __future__ import annotations


class AxisError(ValueError):
    """Base error for axis construction and resolution."""


class InvalidAxis(AxisError):
    pass


class MeasurementFailure(AxisError):
    """Raised when the text backend cannot size a label for the active font."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"cannot measure label {text!r}: {reason}")
        self.text = text
        self.reason = reason


class UnboundedSearch(AxisError):
    pass
