from typing import Any

from pydantic import BaseModel


class Outcome(BaseModel):
    """Result of the last dispatch of a resource.

    ``is_complete`` stays False until the response handler has been invoked.
    Once complete, exactly one of ``is_success`` and ``is_failure`` is True and
    ``response`` holds the body that was delivered to the handler.
    """

    is_complete: bool = False
    is_success: bool = False
    is_failure: bool = False
    response: dict[str, Any] | None = None

    def record(self, success: bool, response: dict[str, Any]) -> None:
        self.response = response
        self.is_failure = not success
        self.is_success = success
        self.is_complete = True
