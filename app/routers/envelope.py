from fastapi import Response, status

from app.errors import ErrorKind
from app.schemas.common import ApiResponse

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def respond(result: ApiResponse, response: Response, success_status: int = status.HTTP_200_OK) -> ApiResponse:
    """Set the HTTP status from the envelope's outcome and return it unchanged."""
    if result.success:
        response.status_code = success_status
    else:
        response.status_code = STATUS_BY_KIND.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return result
