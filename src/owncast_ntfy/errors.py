class ConfigError(ValueError):
    """Raised when the relay cannot start with the given configuration."""


class TranslationError(Exception):
    """An Owncast event could not be turned into a notification."""


class UnrecognizedEventType(TranslationError):
    def __init__(self, event_type: str):
        super().__init__(f"unknown owncast message type: {event_type!r}")
        self.event_type = event_type


class IncompleteEvent(TranslationError):
    pass


class NotificationError(Exception):
    """Delivery to ntfy failed, either on the wire or with a non-200 reply."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
