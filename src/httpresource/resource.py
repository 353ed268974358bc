"""Fluent builder for single HTTP requests.

Usage::

    Resource.GET("https://example.com/items")
        .basic("user", "password")
        .param("page", "2")
        .response(on_items)
        .send()

The handler receives ``(success, body)`` on the completion context. Failed
requests deliver ``{"ErrorMessage": "..."}`` as the body.
"""

from collections.abc import Sized
from datetime import timedelta
from logging import Logger, getLogger
from threading import Event
from typing import Any, Mapping, Union

from ._config import Config, ConfigurationManager
from ._services import Dispatcher
from ._utils._completion import CompletionContext
from ._utils._encoding import prepare_request
from ._utils._request_spec import PreparedRequest, RequestSpec, ResponseHandler
from ._utils._work_queue import Priority
from ._utils.constants import LOGGER_NAME
from .models import Outcome


class Resource:
    """A REST endpoint request, configured by chained calls and sent once.

    Configuration methods mutate this instance and return it. Nothing is
    validated while building; problems surface as a failure outcome after
    ``send()``. A resource is owned by a single caller and must not be sent
    concurrently.
    """

    def __init__(
        self,
        method: str,
        url: str,
        *,
        config: Config | None = None,
        completion: CompletionContext | None = None,
        logger: Logger | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._config = config or ConfigurationManager().config
        self._logger = logger or getLogger(LOGGER_NAME)
        self._dispatcher = dispatcher or Dispatcher(
            config=self._config, completion=completion, logger=self._logger
        )
        self.spec = RequestSpec(
            method=method,
            url=url,
            timeout=self._config.timeout,
            priority=self._config.priority,
        )
        self.outcome = Outcome()
        self._delivered = Event()

    @classmethod
    def GET(cls, url: str, **kwargs: Any) -> "Resource":
        """Resource with HTTP GET."""
        return cls("GET", url, **kwargs)

    @classmethod
    def POST(cls, url: str, **kwargs: Any) -> "Resource":
        """Resource with HTTP POST."""
        return cls("POST", url, **kwargs)

    @classmethod
    def PUT(cls, url: str, **kwargs: Any) -> "Resource":
        """Resource with HTTP PUT."""
        return cls("PUT", url, **kwargs)

    @classmethod
    def DELETE(cls, url: str, **kwargs: Any) -> "Resource":
        """Resource with HTTP DELETE."""
        return cls("DELETE", url, **kwargs)

    @classmethod
    def HEAD(cls, url: str, **kwargs: Any) -> "Resource":
        """Resource with HTTP HEAD."""
        return cls("HEAD", url, **kwargs)

    @property
    def method(self) -> str:
        return self.spec.method

    @property
    def url(self) -> str:
        return self.spec.url

    @property
    def is_complete(self) -> bool:
        return self.outcome.is_complete

    @property
    def is_success(self) -> bool:
        return self.outcome.is_success

    @property
    def is_failure(self) -> bool:
        return self.outcome.is_failure

    def basic(self, user: str, password: str) -> "Resource":
        """Add basic auth credentials to the request headers."""
        self.spec.basic_auth = (user, password)
        return self

    def header(self, name: str, value: str) -> "Resource":
        """Set a header; it overrides basic auth and the body content type."""
        self.spec.headers[name] = value
        return self

    def response(self, handler: ResponseHandler) -> "Resource":
        """Set the response handler.

        The first argument is True when the request succeeded. The second is
        the decoded JSON object, or a dictionary with an ``ErrorMessage`` key
        when it failed.
        """
        self.spec.response_handler = handler
        return self

    def params(self, params: Mapping[str, str]) -> "Resource":
        for name, value in params.items():
            self.param(name, value)
        return self

    def param(self, name: str, value: str) -> "Resource":
        self.spec.params[name] = value
        return self

    def form(self, name: str, value: str) -> "Resource":
        self.spec.form[name] = value
        return self

    def image(self, image: bytes, field_name: str) -> "Resource":
        # empty buffers are ignored, anything else is converted at send()
        if isinstance(image, Sized) and len(image) == 0:
            return self
        self.spec.binary_parts[field_name] = image
        return self

    def timeout(self, timeout: Union[int, float, timedelta]) -> "Resource":
        self.spec.timeout = timeout
        return self

    def priority(self, priority: Union[Priority, int]) -> "Resource":
        self.spec.priority = priority
        return self

    def log(self, message: str) -> "Resource":
        self._logger.debug(f"Resource: {message}")
        return self

    def cancel(self) -> None:
        """Cancel the queued dispatch, if any.

        A network call that has already started cannot be aborted and its
        response is still delivered.
        """
        self._dispatcher.cancel()

    def send(self) -> "Resource":
        """Send the request to the server.

        The request is assembled now from a snapshot of the current
        configuration and executed on this resource's private queue.
        """
        spec = self.spec.snapshot()
        self._delivered = Event()

        prepared: PreparedRequest | None = None
        error: Exception | None = None
        try:
            prepared = prepare_request(spec)
        except (TypeError, ValueError) as e:
            error = e

        self.log(f"sending {spec.method} {spec.url}")
        self._dispatcher.submit(
            prepared,
            lambda success, body: self._dispatch_response(spec, success, body),
            priority=spec.priority,
            error=error,
        )
        return self

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the response handler has run.

        Returns:
            True if the handler ran within ``timeout`` seconds.
        """
        return self._delivered.wait(timeout)

    def _dispatch_response(
        self, spec: RequestSpec, success: bool, response: dict[str, Any]
    ) -> None:
        self.log("dispatching response")
        self.outcome.record(success, response)
        try:
            if spec.response_handler is not None:
                spec.response_handler(success, response)
        except Exception:
            self._logger.exception("Response handler failed")
        finally:
            self._delivered.set()
