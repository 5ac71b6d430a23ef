"""Errors raised while resolving and classifying seat templates."""

from typing import List, Optional


class SeatDirectionError(Exception):
    """Base class for seat direction engine errors."""


class TemplateUnresolvedError(SeatDirectionError):
    """No tier of the override chain yields a positive seat count."""

    def __init__(self, coach_code: Optional[str] = None, message: Optional[str] = None):
        self.coach_code = coach_code
        if message is None:
            message = f"No seat data available for coach {coach_code or '<unknown>'}"
        super().__init__(message)


class TemplateInvalidError(SeatDirectionError, ValueError):
    """A seat template has a bad seat count or bad/overlapping ranges."""

    def __init__(self, reasons: List[str], coach_code: Optional[str] = None):
        self.reasons = list(reasons)
        self.coach_code = coach_code
        prefix = f"Invalid seat template for coach {coach_code}" if coach_code else "Invalid seat template"
        super().__init__(f"{prefix}: {'; '.join(self.reasons)}")
