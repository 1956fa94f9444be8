class ClientRequestError(Exception):
    pass


class TaskApiError(ClientRequestError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, status: int):
        self.status = status
        super().__init__(message)


class NetworkError(ClientRequestError):
    """The request never produced a response."""

    pass
