"""Error taxonomy for the recommendation pipeline."""

from typing import Optional


class CareerMatchError(Exception):
    """Base class for pipeline errors."""


class PreconditionError(CareerMatchError):
    """A required identifier or credential is missing. Never recovered."""


class ExtractionError(CareerMatchError):
    """Resume text could not be extracted; callers continue without it."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GenerationError(CareerMatchError):
    """The completion endpoint failed or returned nothing usable."""


class ParseError(CareerMatchError):
    """Model output could not be turned into recommendation records."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class PersistenceError(CareerMatchError):
    """A read or write against the recommendation store failed."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class ProvisioningError(CareerMatchError):
    """Resume upload failed after provisioning the user's storage folder."""
