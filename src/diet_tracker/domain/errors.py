"""Error taxonomy shared by services and the API layer."""


class DietTrackerError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DietTrackerError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(DietTrackerError):
    """Unknown food item, meal entry or weight entry."""

    status_code = 404


class ConflictError(DietTrackerError):
    """Barcode already used by another food item."""

    status_code = 400


class PersistenceError(DietTrackerError):
    """The JSON document could not be read or written."""

    status_code = 500
