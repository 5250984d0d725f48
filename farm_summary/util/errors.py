from typing import Optional


class RpcError(Exception):
    """
    Base class for every failure talking to a daemon RPC service. Carries the
    service name and url so the command line can say which daemon was at fault.
    """

    def __init__(self, message: str, service: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.service = service
        self.url = url

    def __str__(self) -> str:
        message = super().__str__()
        if self.url is not None:
            return f"{message} ({self.url})"
        return message


class CertificateLoadError(RpcError):
    pass


class RpcConnectionError(RpcError):
    pass


class RpcStatusError(RpcError):
    def __init__(self, message: str, status: Optional[int] = None, service: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message, service, url)
        self.status = status


class MalformedResponseError(RpcError):
    pass
