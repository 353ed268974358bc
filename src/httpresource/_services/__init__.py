from ._dispatcher import Dispatcher

__all__ = ["Dispatcher"]
