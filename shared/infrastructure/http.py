"""
HTTP mapping of engine results

The routing layer turns ``Ok`` values into responses with its serializers;
``Err`` results become a JSON body ``{kind, message, detail}`` with a status
code chosen by error kind.
"""

from rest_framework import status
from rest_framework.response import Response

from shared.domain.errors import ErrorKind
from shared.domain.result import Err

ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RESTRICTION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.POLICY: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.PRICING: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INFRASTRUCTURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: Err) -> Response:
    return Response(
        error.to_dict(),
        status=ERROR_STATUS.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def invalid_input_response(errors) -> Response:
    """Serializer errors in the same shape as engine validation errors"""
    return Response(
        {
            'kind': ErrorKind.VALIDATION.value,
            'message': 'Validation failed',
            'detail': errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )
