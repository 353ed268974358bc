from logging import Logger, getLogger
from typing import Any, Callable

import httpx
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode, TracerProvider

from .._config import Config, ConfigurationManager
from .._utils._completion import CompletionContext, MainQueue
from .._utils._request_spec import PreparedRequest
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils._work_queue import Operation, OperationQueue, Priority
from .._utils.constants import CONTENT_TYPE_JSON, HEADER_CONTENT_TYPE, LOGGER_NAME
from ..models import errors

ResultCallback = Callable[[bool, dict[str, Any]], None]

TRANSPORT_ERRORS = (
    httpx.HTTPError,
    httpx.InvalidURL,
    OSError,
    TypeError,
    ValueError,
)


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 300


class Dispatcher:
    """Runs prepared requests off the calling thread and normalizes the result.

    Each dispatcher owns a private ``OperationQueue``. The transport call blocks
    a queue worker; classification, JSON decoding and the result callback run
    on the completion context.
    """

    def __init__(
        self,
        *,
        config: Config | None = None,
        completion: CompletionContext | None = None,
        client: httpx.Client | None = None,
        logger: Logger | None = None,
        tracer_provider: TracerProvider | None = None,
    ) -> None:
        self._config = config or ConfigurationManager().config
        self._completion = completion or MainQueue()
        self._client = client
        self._logger = logger or getLogger(LOGGER_NAME)
        self._tracer = trace.get_tracer(__name__, tracer_provider=tracer_provider)
        self._queue = OperationQueue()

    @property
    def queue(self) -> OperationQueue:
        return self._queue

    def submit(
        self,
        request: PreparedRequest | None,
        on_result: ResultCallback,
        *,
        priority: Any = Priority.NORMAL,
        error: BaseException | None = None,
    ) -> Operation:
        """Enqueue one dispatch.

        A ``request`` of None, typically paired with the assembly ``error``,
        skips the transport and completes as a transport failure. Cancellation
        only takes effect before the transport call starts.
        """

        def block(operation: Operation) -> None:
            if operation.is_cancelled:
                self._logger.debug("operation cancelled before dispatch")
                return

            response = None
            if request is not None:
                response = self.fetch(request)
            else:
                self._logger.warning(f"Request could not be assembled: {error}")

            # a returned network call is always delivered
            self._completion.post(lambda: self._complete(response, on_result))

        operation = Operation(block)
        self._queue.add(operation, priority)
        return operation

    def cancel(self) -> None:
        if self._queue.operation_count > 0:
            self._queue.cancel_all_operations()

    def fetch(self, request: PreparedRequest) -> httpx.Response | None:
        """Perform the blocking transport call.

        Returns:
            The response, or None when the transport failed.
        """
        with self._tracer.start_as_current_span(
            f"HTTP {request.method}", kind=SpanKind.CLIENT
        ) as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.url", request.url)
            try:
                if self._client is not None:
                    response = self._send(self._client, request)
                else:
                    with httpx.Client(**get_httpx_client_kwargs(self._config)) as client:
                        response = self._send(client, request)
            except TRANSPORT_ERRORS as e:
                self._logger.warning(f"{request.method} {request.url} failed: {e!r}")
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                return None

            span.set_attribute("http.status_code", response.status_code)
            if not is_success_status(response.status_code):
                span.set_status(Status(StatusCode.ERROR))

        self._logger.debug(f"response = {response.status_code} {response.headers}")
        return response

    def _send(self, client: httpx.Client, request: PreparedRequest) -> httpx.Response:
        self._logger.debug(f"Request: {request.method} {request.url}")
        return client.request(
            request.method,
            request.url,
            content=request.content,
            headers=request.headers,
            timeout=request.timeout,
        )

    def classify(self, response: httpx.Response | None) -> tuple[bool, dict[str, Any]]:
        """Map a transport result to the ``(success, body)`` pair.

        Args:
            response: The transport response, or None after a transport error.

        Returns:
            ``(True, decoded_json_object)`` for a 2xx JSON object response,
            otherwise ``(False, {"ErrorMessage": ...})``.
        """
        self._logger.debug("parsing response")

        if response is None:
            return False, errors.transport_error()

        if not is_success_status(response.status_code):
            self._logger.debug(f"json response = {self._decode(response)}")
            return False, errors.status_error(response.status_code, response.text)

        content_type = response.headers.get(HEADER_CONTENT_TYPE, "")
        if CONTENT_TYPE_JSON not in content_type:
            return False, errors.content_type_error(content_type)

        body = self._decode(response)
        self._logger.debug(f"json response = {body}")
        if body is None:
            return False, errors.json_error()

        return True, body

    def _decode(self, response: httpx.Response) -> dict[str, Any] | None:
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    def _complete(
        self, response: httpx.Response | None, on_result: ResultCallback
    ) -> None:
        success, body = self.classify(response)
        on_result(success, body)
