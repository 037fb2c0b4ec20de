"""Translation of service exceptions into API error responses."""
from rest_framework import status
from rest_framework.response import Response

from .services.exceptions import (
    InvalidInputError,
    NotFoundError,
    StorageFailureError,
)


def service_error_response(error):
    """
    Build the ``{'error': ...}`` response for a service exception.

    NotFoundError -> 404, InvalidInputError -> 400, StorageFailureError -> 503,
    anything else from the services layer -> 400.
    """
    if isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, StorageFailureError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(error, InvalidInputError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)
