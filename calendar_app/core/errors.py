class CalendarError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CalendarError):
    """A required field is missing or a value cannot be coerced."""

    status_code = 400


class NotFoundError(CalendarError):
    status_code = 404

    def __init__(self, message: str = "Event not found") -> None:
        super().__init__(message)


class StoreError(CalendarError):
    """The document store could not be reached or the query failed."""

    status_code = 500
