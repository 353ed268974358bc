from typing import Any

ERROR_MESSAGE_KEY = "ErrorMessage"


def error_payload(message: str) -> dict[str, Any]:
    """Build the body delivered to a response handler for a failed request."""
    return {ERROR_MESSAGE_KEY: message}


def transport_error(status_code: int | None = None) -> dict[str, Any]:
    return error_payload(f"HTTP Status Code {status_code}.")


def status_error(status_code: int, raw: str) -> dict[str, Any]:
    return error_payload(f"HTTP Status Code {status_code} with response {raw}.")


def content_type_error(content_type: str) -> dict[str, Any]:
    return error_payload(f"Unexpected contentType: {content_type}.")


def json_error() -> dict[str, Any]:
    return error_payload("Error parsing json response.")
