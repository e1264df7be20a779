from __future__ import annotations


class BridgeError(RuntimeError):
    pass


class UnknownOperationError(BridgeError, LookupError):
    pass


class NotImplementedOnPlatformError(BridgeError, NotImplementedError):
    pass


class BackendConnectionError(BridgeError):
    pass


class BackendExecutionError(BridgeError):
    pass


class MalformedResponseError(BridgeError):
    def __init__(self, message: str, raw: object = None) -> None:
        super().__init__(message)
        self.raw = raw
