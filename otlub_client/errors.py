from __future__ import annotations


class SdkError(RuntimeError):
    pass


class TransportError(SdkError):
    pass


class ProtocolError(SdkError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class EnvelopeError(SdkError):
    pass


class StorageError(SdkError):
    pass
