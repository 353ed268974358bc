import base64
import time
import uuid
from datetime import timedelta
from logging import getLogger
from typing import Any, Mapping
from urllib.parse import quote_plus

from httpx import Headers

from ._request_spec import PreparedRequest, RequestSpec
from .constants import (
    BODY_METHODS,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_MULTIPART,
    CONTENT_TYPE_PNG,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
)

logger = getLogger(__name__)

# Query characters that are never escaped; '&', '=', '+' and '#' are always escaped
QUERY_SAFE_CHARACTERS = "!$'()*,/:;?@~"
BOUNDARY_PREFIX = "----WebKitFormBoundary"
CRLF = "\r\n"


def percent_encode(value: str) -> str:
    """Percent-encode a query component, turning spaces into ``+``."""
    return quote_plus(value, safe=QUERY_SAFE_CHARACTERS)


def build_params(params: Mapping[str, str]) -> str:
    """Encode a mapping as ``name=value`` pairs joined by ``&``.

    Used for both URL query strings and ``application/x-www-form-urlencoded``
    bodies. Pair order follows the mapping and is not part of the contract.

    Examples:
        >>> build_params({"a": "1", "b": "x y"})
        'a=1&b=x+y'
    """
    parts = []
    for name, value in params.items():
        encoded_name = percent_encode(name)
        encoded_value = percent_encode(value)
        logger.debug(f"encoded({name}, {value}) -> ({encoded_name}, {encoded_value})")
        parts.append(f"{encoded_name}={encoded_value}")
    return "&".join(parts)


def make_boundary() -> str:
    return f"{BOUNDARY_PREFIX}{uuid.uuid4().hex}"


def encode_multipart(
    form: Mapping[str, str],
    binary_parts: Mapping[str, bytes],
    boundary: str | None = None,
) -> tuple[bytes, str]:
    """Encode form fields and binary parts as a multipart/form-data body.

    Binary parts are always declared as ``image/png`` and named after the
    current time in milliseconds.

    Returns:
        The body and the boundary it was built with.
    """
    boundary = boundary or make_boundary()
    parts: list[bytes] = []

    for name, value in form.items():
        parts.append(f"--{boundary}{CRLF}".encode("utf-8"))
        parts.append(
            f'Content-Disposition: form-data; name="{name}"{CRLF}{CRLF}'.encode("utf-8")
        )
        parts.append(f"{value}{CRLF}".encode("utf-8"))

    for field_name, data in binary_parts.items():
        filename = f"{int(time.time() * 1000)}.png"
        parts.append(f"--{boundary}{CRLF}".encode("utf-8"))
        parts.append(
            f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"{CRLF}'.encode(
                "utf-8"
            )
        )
        parts.append(f"Content-Type: {CONTENT_TYPE_PNG}{CRLF}{CRLF}".encode("utf-8"))
        parts.append(bytes(data))
        parts.append(CRLF.encode("utf-8"))

    parts.append(f"--{boundary}--{CRLF}".encode("utf-8"))
    return b"".join(parts), boundary


def encode_body(
    method: str, form: Mapping[str, str], binary_parts: Mapping[str, bytes]
) -> tuple[bytes | None, str | None]:
    """Choose and build the request body.

    Only POST and PUT carry a body. Binary parts select multipart encoding,
    form fields alone select form-urlencoding, and anything else sends no body.

    Returns:
        The body and its content type, or ``(None, None)``.
    """
    if method.upper() not in BODY_METHODS:
        return None, None

    if binary_parts:
        logger.debug("adding multipart form data")
        body, boundary = encode_multipart(form, binary_parts)
        return body, f"{CONTENT_TYPE_MULTIPART}; boundary={boundary}"

    if form:
        logger.debug("adding form data")
        return build_params(form).encode("utf-8"), CONTENT_TYPE_FORM

    return None, None


def basic_auth_header(user: str, password: str) -> str:
    credentials = f"{user}:{password}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


def append_query(url: str, params: Mapping[str, str]) -> str:
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{build_params(params)}"


def timeout_seconds(timeout: Any) -> float | None:
    if timeout is None:
        return None
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


def prepare_request(spec: RequestSpec) -> PreparedRequest:
    """Assemble the physical request for a request spec.

    Headers are applied in order: body content type, basic auth, then explicit
    headers. Header names compare case-insensitively, so an explicit header
    replaces an earlier one with the same name.

    Raises:
        TypeError, ValueError: When the request spec holds values that cannot be encoded.
    """
    url = append_query(spec.url, spec.params)
    logger.debug(f"url = {url}")

    content, content_type = encode_body(spec.method, spec.form, spec.binary_parts)

    headers = Headers()
    if content_type:
        headers[HEADER_CONTENT_TYPE] = content_type

    if spec.basic_auth is not None:
        user, password = spec.basic_auth
        if user is not None and password is not None:
            logger.debug(f"adding auth for {user}")
            headers[HEADER_AUTHORIZATION] = basic_auth_header(user, password)

    for name, value in spec.headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError(f"Header {name!r} must have a str name and value")
        headers[name] = value

    return PreparedRequest(
        method=spec.method.upper(),
        url=url,
        headers=headers,
        content=content,
        timeout=timeout_seconds(spec.timeout),
    )
