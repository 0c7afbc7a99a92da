import logging
import math

from django.db import IntegrityError, transaction

from accounts.models import User
from .chat import SendbirdClient
from .exceptions import ConflictError, NotFoundError, ValidationError
from .models import Employee
from .utils import normalize_timestamp, parse_leading_int, parse_page, parse_strict_int, snake_to_camel

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

# Request keys accepted by update, mapped to model fields
UPDATABLE_INPUTS = {snake_to_camel(field): field for field in Employee.UPDATABLE_FIELDS}


class EmployeeRecordService:
    """
    Create/list/get/update/delete for employee records.

    ``employees`` and ``accounts`` are managers (or querysets) for the
    employee and login account models, ``chat_client`` anything with a
    ``create_user(user_id, nickname)`` method.
    """

    def __init__(self, employees, accounts, chat_client):
        self.employees = employees
        self.accounts = accounts
        self.chat_client = chat_client

    def create(self, data):
        """
        Register an employee for an existing login account.

        ``empId`` must be an integer as sent (an int or a digit string).
        A missing ``dateOfJoining`` is stored as null rather than failing the
        request; an unparseable one raises ``ValueError``.
        """
        username = data.get('username')
        company_email = data.get('companyEmail')
        role = data.get('role')

        if not username or not company_email or not role:
            raise ValidationError('Username, company email, and role are required.')

        emp_id = parse_strict_int(data.get('empId'))
        if emp_id is None:
            raise ValidationError('Emp Id is missing or invalid.')

        if self.employees.filter(pk=emp_id).exists():
            raise ConflictError('Employee already exists.')

        account = self.accounts.filter(pk=emp_id).first()
        if account is None:
            raise ValidationError('Employee not in the login database.')

        if account.username != username:
            raise ValidationError('Employee username does not match with login username')

        date_of_joining = normalize_timestamp(data.get('dateOfJoining'))

        try:
            with transaction.atomic():
                employee = self.employees.create(
                    emp_id=emp_id,
                    username=username,
                    name=data.get('name'),
                    company_email=company_email,
                    designation=data.get('designation'),
                    date_of_joining=date_of_joining,
                    salary=data.get('salary'),
                    role=role,
                    gender=data.get('gender'),
                    age=data.get('age'),
                )
        except IntegrityError:
            # a concurrent create won the race for this empId
            if self.employees.filter(pk=emp_id).exists():
                raise ConflictError('Employee already exists.')
            raise

        logger.info(f"Employee created: {employee.emp_id} ({employee.username})")

        # Not rolled back if this fails; the record stays and the caller gets a 500
        self.chat_client.create_user(emp_id, username)

        return employee

    def list(self, page=None):
        page = parse_page(page)
        offset = (page - 1) * PAGE_SIZE

        employees = list(self.employees.all()[offset:offset + PAGE_SIZE])
        total = self.employees.count()

        return {
            'currentPage': page,
            'totalPages': math.ceil(total / PAGE_SIZE),
            'employeeCount': total,
            'employees': employees,
        }

    def get_one(self, emp_id):
        emp_id = self._parse_emp_id(emp_id, 'Emp Id is missing or invalid.')

        employee = self.employees.filter(pk=emp_id).first()
        if employee is None:
            raise NotFoundError('Employee not found.')
        return employee

    def update(self, emp_id, data):
        emp_id = self._parse_emp_id(emp_id, 'Employee Id is missing or invalid.')

        employee = self.employees.filter(pk=emp_id).first()
        if employee is None:
            raise NotFoundError('Employee not found')

        # Falsy values (0, "", null) leave the stored value as is
        for key, field in UPDATABLE_INPUTS.items():
            value = data.get(key)
            if not value:
                continue
            if field == 'date_of_joining':
                value = normalize_timestamp(value)
            setattr(employee, field, value)

        employee.save(update_fields=list(Employee.UPDATABLE_FIELDS))
        employee.refresh_from_db()

        logger.info(f"Employee updated: {employee.emp_id}")
        return employee

    def delete(self, emp_id):
        emp_id = self._parse_emp_id(emp_id, 'Employee Id is missing or invalid.')

        if not self.employees.filter(pk=emp_id).exists():
            raise NotFoundError('Employee not found.')

        with transaction.atomic():
            self.employees.filter(pk=emp_id).delete()
            self.accounts.filter(pk=emp_id).delete()

        logger.info(f"Employee and login account deleted: {emp_id}")

    @staticmethod
    def _parse_emp_id(value, message):
        emp_id = parse_leading_int(value)
        if not emp_id:
            raise ValidationError(message)
        return emp_id


def get_employee_service():
    """Service wired to the ORM and the configured chat client."""
    return EmployeeRecordService(
        employees=Employee.objects,
        accounts=User.objects,
        chat_client=SendbirdClient.from_settings(),
    )
