import logging
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from .exceptions import EmployeeError, UnexpectedError
from .serializers import EmployeeSerializer
from .services import get_employee_service

logger = logging.getLogger(__name__)


def error_response(exc):
    return Response({'message': exc.message}, status=exc.status_code)


def internal_error_response(action, exc):
    logger.error(f"Employee {action} failed: {str(exc)}", exc_info=True)
    return error_response(UnexpectedError())


class EmployeeListCreateView(APIView):
    """
    GET: paginated list, 20 per page, ``?page=N``
    POST: create an employee for an existing login account
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            result = get_employee_service().list(request.query_params.get('page'))
        except EmployeeError as e:
            return error_response(e)
        except APIException:
            raise
        except Exception as e:
            return internal_error_response('listing', e)

        result['employees'] = EmployeeSerializer(result['employees'], many=True).data
        return Response(result, status=status.HTTP_200_OK)

    def post(self, request):
        try:
            employee = get_employee_service().create(request.data)
        except EmployeeError as e:
            return error_response(e)
        except APIException:
            raise
        except Exception as e:
            return internal_error_response('creation', e)

        return Response({
            'message': 'Employee Details registered successfully.',
            'data': EmployeeSerializer(employee).data
        }, status=status.HTTP_201_CREATED)


class EmployeeDetailView(APIView):
    """
    GET: single employee
    PATCH/PUT: sparse update of companyEmail, designation, salary, gender, dateOfJoining
    DELETE: remove the employee and its login account
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, emp_id):
        try:
            employee = get_employee_service().get_one(emp_id)
        except EmployeeError as e:
            return error_response(e)
        except APIException:
            raise
        except Exception as e:
            return internal_error_response('lookup', e)

        return Response({'employee': EmployeeSerializer(employee).data})

    def patch(self, request, emp_id):
        try:
            employee = get_employee_service().update(emp_id, request.data)
        except EmployeeError as e:
            return error_response(e)
        except APIException:
            raise
        except Exception as e:
            return internal_error_response('update', e)

        return Response({
            'message': 'Employee updated successfully',
            'updatedEmployee': EmployeeSerializer(employee).data
        })

    put = patch

    def delete(self, request, emp_id):
        try:
            get_employee_service().delete(emp_id)
        except EmployeeError as e:
            return error_response(e)
        except APIException:
            raise
        except Exception as e:
            return internal_error_response('deletion', e)

        return Response({
            'message': 'Employee and associated login record deleted successfully'
        }, status=status.HTTP_200_OK)
