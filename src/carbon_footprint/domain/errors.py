"""Domain exceptions for footprint calculations."""


class FootprintError(Exception):
    """Base class for carbon footprint errors."""


class ProfileValidationError(FootprintError):
    """Raised when a lifestyle profile is missing or has an invalid field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ComputationError(FootprintError):
    """Raised when a calculation produces a negative or non-finite value."""


class SessionNotFoundError(FootprintError):
    """Raised when a questionnaire session does not exist."""


class FootprintNotFoundError(FootprintError):
    """Raised when a session has no calculated footprint yet."""


class UnknownStepError(FootprintError):
    """Raised for a questionnaire step category that is not supported."""


class UnknownChartTypeError(FootprintError):
    """Raised for a chart type that cannot be generated."""
