"""Domain exceptions."""


class TransportError(Exception):
    """Raised when the model endpoint cannot be reached."""


class AugmentationUnavailableError(Exception):
    """Raised when every attempt to reach the model endpoint failed."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Model endpoint unavailable after {attempts} attempts")
        self.attempts = attempts
