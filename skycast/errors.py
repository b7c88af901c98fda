"""Error taxonomy shared by the weather pipeline, history store and API."""

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    MALFORMED_PAYLOAD = "malformed_payload"
    PERSISTENCE = "persistence"
    CONFIG = "config"
    INTERNAL = "internal"


class SkycastError(Exception):
    """Base class for every failure the application reports to callers."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SkycastError):
    """Bad input, rejected before any I/O."""

    kind = ErrorKind.VALIDATION


class NotFoundError(SkycastError):
    """No geocoding match, or no history record with the requested id."""

    kind = ErrorKind.NOT_FOUND


class UpstreamError(SkycastError):
    """Provider unreachable, timed out, or answered with a non-success status."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayloadError(SkycastError):
    """Provider response is missing a field the normalizer requires."""

    kind = ErrorKind.MALFORMED_PAYLOAD


class PersistenceError(SkycastError):
    """History file could not be read or written."""

    kind = ErrorKind.PERSISTENCE


class ConfigError(SkycastError):
    """Startup-time configuration problem, e.g. a missing API key."""

    kind = ErrorKind.CONFIG


class ResolutionFailedError(SkycastError):
    """Wraps the first failure raised while resolving a city's weather.

    ``kind`` mirrors the wrapped error so callers can still tell an
    unreachable provider from a changed provider contract.
    """

    def __init__(self, city_name: str, cause: SkycastError):
        super().__init__(f"Could not resolve weather for {city_name!r}: {cause.message}")
        self.city_name = city_name
        self.cause = cause
        self.kind = cause.kind
