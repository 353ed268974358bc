from .errors import ERROR_MESSAGE_KEY, error_payload
from .outcome import Outcome

__all__ = ["ERROR_MESSAGE_KEY", "Outcome", "error_payload"]
