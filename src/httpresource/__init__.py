"""Fluent, asynchronous HTTP request builder."""

from ._config import Config, ConfigurationManager
from ._services import Dispatcher
from ._utils import (
    CompletionContext,
    LoopCompletionContext,
    MainQueue,
    Priority,
    RequestSpec,
    build_params,
    encode_multipart,
)
from .models import ERROR_MESSAGE_KEY, Outcome
from .resource import Resource

__all__ = [
    "CompletionContext",
    "Config",
    "ConfigurationManager",
    "Dispatcher",
    "ERROR_MESSAGE_KEY",
    "LoopCompletionContext",
    "MainQueue",
    "Outcome",
    "Priority",
    "RequestSpec",
    "Resource",
    "build_params",
    "encode_multipart",
]
