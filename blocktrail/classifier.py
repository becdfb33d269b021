from __future__ import annotations
import json
from typing import Any, Optional
from .exceptions import (
    ErrorKind,
    Failure,
    ResponseOutcome,
    Success,
    GENERIC_HTTP_ERROR_MSG,
    GENERIC_SERVER_ERROR_MSG,
    INVALID_CREDENTIALS_MSG,
    MISSING_ENDPOINT_MSG,
    OBJECT_NOT_FOUND_MSG,
    UNKNOWN_ENDPOINT_SPECIFIC_ERROR_MSG,
)

ENDPOINT_NOT_FOUND = 'Endpoint Not Found'
NOTHING = '*nothing*'


def _field(body: Any, name: str) -> Optional[Any]:
    # only a decoded JSON object has fields; raw text, lists and None have none
    if isinstance(body, dict):
        return body.get(name)
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def _server_message(generic: str, body: Any) -> str:
    msg = _field(body, 'msg')
    return f"{generic}\nServer Response: {_as_text(msg) if msg is not None else NOTHING}"


def classify(http_status: int, body: Any = None) -> ResponseOutcome:
    """Map an HTTP status plus decoded body onto a ``Success`` or ``Failure``.

    2xx passes the body through untouched. Every other status yields exactly
    one ``ErrorKind``; missing fields in the body select the fallback branch
    of their row and never raise.
    """
    if 200 <= http_status < 300:
        return Success(body)

    code = _field(body, 'code')
    if http_status in (400, 403):
        msg = _field(body, 'msg')
        if msg is not None:
            return Failure(ErrorKind.ENDPOINT_SPECIFIC_ERROR, _as_text(msg), code, http_status)
        return Failure(ErrorKind.UNKNOWN_ENDPOINT_SPECIFIC_ERROR, UNKNOWN_ENDPOINT_SPECIFIC_ERROR_MSG, code, http_status)
    if http_status == 401:
        return Failure(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MSG, code, http_status)
    if http_status == 404:
        if _field(body, 'msg') == ENDPOINT_NOT_FOUND:
            return Failure(ErrorKind.MISSING_ENDPOINT, MISSING_ENDPOINT_MSG, code, http_status)
        return Failure(ErrorKind.OBJECT_NOT_FOUND, OBJECT_NOT_FOUND_MSG, code, http_status)
    if http_status == 500:
        return Failure(ErrorKind.GENERIC_SERVER_ERROR, _server_message(GENERIC_SERVER_ERROR_MSG, body), code, http_status)
    return Failure(ErrorKind.GENERIC_HTTP_ERROR, _server_message(GENERIC_HTTP_ERROR_MSG, body), code, http_status)
