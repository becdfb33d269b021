from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Any, Optional, Union


class ErrorKind(enum.Enum):
    """Closed set of request failure kinds a caller can branch on."""
    INVALID_CREDENTIALS = 'InvalidCredentials'
    ENDPOINT_SPECIFIC_ERROR = 'EndpointSpecificError'
    UNKNOWN_ENDPOINT_SPECIFIC_ERROR = 'UnknownEndpointSpecificError'
    MISSING_ENDPOINT = 'MissingEndpoint'
    OBJECT_NOT_FOUND = 'ObjectNotFound'
    GENERIC_SERVER_ERROR = 'GenericServerError'
    GENERIC_HTTP_ERROR = 'GenericHTTPError'


INVALID_CREDENTIALS_MSG = "Your credentials are incorrect."
GENERIC_HTTP_ERROR_MSG = "An HTTP Error has occurred!"
GENERIC_SERVER_ERROR_MSG = "A Server Error has occurred!"
EMPTY_RESPONSE_MSG = "The HTTP Response was empty."
UNKNOWN_ENDPOINT_SPECIFIC_ERROR_MSG = "The endpoint returned an unknown error."
MISSING_ENDPOINT_MSG = "The endpoint you've tried to access does not exist. Check your URL."
OBJECT_NOT_FOUND_MSG = "The object you've tried to access does not exist."


@dataclass(frozen=True)
class Success:
    body: Any


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    code: Optional[Union[str, int]]
    http_status: int


ResponseOutcome = Union[Success, Failure]


class ApiRequestError(Exception):
    """A classified API failure (see ``ErrorKind``)."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind

    @property
    def code(self) -> Optional[Union[str, int]]:
        return self.failure.code

    @property
    def http_status(self) -> int:
        return self.failure.http_status


class ApiTransportError(Exception):
    """Network failure or unusable response reported by the transport."""


class ApiConfigError(Exception):
    """Required configuration is missing."""


class ConversionError(ValueError):
    """Malformed or out-of-range amount given to the converter."""
