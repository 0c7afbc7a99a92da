from rest_framework import status
from rest_framework.exceptions import APIException


class EmployeeError(APIException):
    """Base class for errors raised by employee record operations."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'employee_error'

    @property
    def message(self):
        return str(self.detail)


class ValidationError(EmployeeError):
    """Missing or malformed input."""
    default_code = 'invalid'


class ConflictError(EmployeeError):
    """An employee record already exists for the given empId."""
    default_detail = 'Employee already exists.'
    default_code = 'conflict'


class NotFoundError(EmployeeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Employee not found.'
    default_code = 'not_found'


class UnexpectedError(EmployeeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal Server Error'
    default_code = 'error'
