class TimelyError(Exception):
    """Base class for errors raised by Timely."""


class InvalidStartTimeError(TimelyError, ValueError):
    """Raised when a start time cannot be read as an hour/minute pair."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid start time: {value!r} (expected HH:MM, e.g. 09:00)")
