from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Callable, Union

from httpx import Headers

from ._work_queue import Priority
from .constants import DEFAULT_TIMEOUT

ResponseHandler = Callable[[bool, dict[str, Any]], None]


@dataclass
class RequestSpec:
    """Encapsulates the configuration of a single pending HTTP request.

    This class holds everything a ``Resource`` builder collects before dispatch:
    the HTTP method and URL, query parameters, form fields, binary parts,
    headers, basic-auth credentials, timeout, queue priority and the response
    handler. Values are stored as given; nothing is validated until dispatch.
    """

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] = field(default_factory=dict)
    binary_parts: dict[str, bytes] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    basic_auth: tuple[str, str] | None = None
    timeout: Union[int, float, timedelta, None] = DEFAULT_TIMEOUT
    priority: Any = Priority.NORMAL
    response_handler: ResponseHandler | None = None

    def snapshot(self) -> "RequestSpec":
        """Copy of the spec whose mappings are detached from this instance."""
        return replace(
            self,
            params=dict(self.params),
            form=dict(self.form),
            binary_parts=dict(self.binary_parts),
            headers=dict(self.headers),
        )


@dataclass(frozen=True)
class PreparedRequest:
    """The physical request handed to the transport."""

    method: str
    url: str
    headers: Headers
    content: bytes | None = None
    timeout: float | None = None
