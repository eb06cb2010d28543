from __future__ import annotations


class ApiError(Exception):
    """Base error raised by the campus API client."""

    def __init__(self, detail: str = "", status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class UnauthenticatedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class InvalidInputError(ApiError):
    pass


class UnavailableError(ApiError):
    """Server-side failure or the server could not be reached."""


def error_for_status(status_code: int, detail: str) -> ApiError:
    if status_code == 401:
        return UnauthenticatedError(detail, status_code)
    if status_code == 403:
        return ForbiddenError(detail, status_code)
    if status_code == 404:
        return NotFoundError(detail, status_code)
    if status_code in (400, 409, 422):
        return InvalidInputError(detail, status_code)
    if status_code >= 500:
        return UnavailableError(detail, status_code)
    return ApiError(detail, status_code)
