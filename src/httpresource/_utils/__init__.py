from ._completion import CompletionContext, LoopCompletionContext, MainQueue
from ._encoding import build_params, encode_body, encode_multipart, prepare_request
from ._request_spec import PreparedRequest, RequestSpec
from ._work_queue import Operation, OperationQueue, Priority

__all__ = [
    "CompletionContext",
    "LoopCompletionContext",
    "MainQueue",
    "Operation",
    "OperationQueue",
    "PreparedRequest",
    "Priority",
    "RequestSpec",
    "build_params",
    "encode_body",
    "encode_multipart",
    "prepare_request",
]
