"""Engine error types."""


class ValidationError(ValueError):
    """Raised when a profile lacks fields required for target calculation."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            "Missing required profile data: " + ", ".join(missing_fields)
        )
