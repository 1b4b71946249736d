from typing import Dict, NoReturn

from fastapi import status
from libs.result import Error

from src.domain.errors import ErrorCode


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def error_body(code: ErrorCode, message: str) -> dict:
    """JSON body shared by every error response"""
    return {"error": {"code": code, "message": message}}


def raise_for_error(error: Error, client_statuses: Dict[ErrorCode, int]) -> NoReturn:
    """
    Translate a use case error into an HTTP exception.

    Codes listed in client_statuses become ClientError with that status;
    anything else is a ServerError (500, no detail to the client).
    """
    status_code = client_statuses.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
