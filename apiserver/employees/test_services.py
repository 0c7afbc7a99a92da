from datetime import datetime, timezone
from unittest import mock

import pytest
from django.db import DatabaseError

from accounts.models import User
from employees.exceptions import ConflictError, NotFoundError, ValidationError
from employees.models import Employee
from employees.services import UPDATABLE_INPUTS, EmployeeRecordService

pytestmark = pytest.mark.django_db


def create_payload(**overrides):
    payload = {
        'empId': 101,
        'username': 'jdoe',
        'companyEmail': 'j@x.com',
        'designation': 'Engineer',
        'salary': 5000,
        'role': 'dev',
        'gender': 'M',
        'age': 30,
        'dateOfJoining': '2024-01-15',
        'name': 'John Doe',
    }
    payload.update(overrides)
    return payload


def make_employee(emp_id, **fields):
    defaults = {
        'username': f'user{emp_id}',
        'company_email': f'user{emp_id}@x.com',
        'role': 'dev',
        'salary': 1000,
        'designation': 'Engineer',
        'gender': 'F',
    }
    defaults.update(fields)
    return Employee.objects.create(emp_id=emp_id, **defaults)


class TestCreate:
    def test_creates_record_and_provisions_chat_user(self, service, chat_client, login_account):
        employee = service.create(create_payload())

        assert employee.emp_id == 101
        assert employee.username == 'jdoe'
        assert employee.date_of_joining == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert Employee.objects.filter(pk=101).count() == 1
        chat_client.create_user.assert_called_once_with(101, 'jdoe')

    @pytest.mark.parametrize('missing', ['username', 'companyEmail', 'role'])
    def test_required_fields(self, service, chat_client, login_account, missing):
        with pytest.raises(ValidationError) as exc:
            service.create(create_payload(**{missing: ''}))

        assert exc.value.message == 'Username, company email, and role are required.'
        assert not Employee.objects.exists()
        chat_client.create_user.assert_not_called()

    def test_required_fields_checked_before_anything_else(self, service):
        # no login account and no empId, still the missing-fields error
        with pytest.raises(ValidationError) as exc:
            service.create({'companyEmail': 'j@x.com', 'role': 'dev'})
        assert exc.value.message == 'Username, company email, and role are required.'

    def test_second_create_is_a_conflict(self, service, chat_client, login_account):
        service.create(create_payload())

        with pytest.raises(ConflictError) as exc:
            service.create(create_payload())

        assert exc.value.message == 'Employee already exists.'
        assert exc.value.status_code == 400
        assert chat_client.create_user.call_count == 1

    @pytest.mark.parametrize('emp_id', [101.9, True, '101abc', None])
    def test_emp_id_must_be_an_integer_as_sent(self, service, chat_client, emp_id):
        User.objects.create_user(username='jdoe', password='secret-pass', id=101)
        User.objects.create_user(username='first', password='secret-pass', id=1)

        with pytest.raises(ValidationError) as exc:
            service.create(create_payload(empId=emp_id))

        assert exc.value.message == 'Emp Id is missing or invalid.'
        assert not Employee.objects.exists()
        chat_client.create_user.assert_not_called()

    def test_digit_string_emp_id_is_accepted(self, service, login_account):
        assert service.create(create_payload(empId='101')).emp_id == 101

    def test_requires_login_account(self, service):
        with pytest.raises(ValidationError) as exc:
            service.create(create_payload())
        assert exc.value.message == 'Employee not in the login database.'

    def test_username_must_match_login_account(self, service, login_account):
        with pytest.raises(ValidationError) as exc:
            service.create(create_payload(username='someone-else'))
        assert exc.value.message == 'Employee username does not match with login username'
        assert not Employee.objects.exists()

    def test_missing_date_of_joining_is_stored_empty(self, service, login_account):
        payload = create_payload()
        del payload['dateOfJoining']

        employee = service.create(payload)

        assert employee.date_of_joining is None

    def test_unparseable_date_is_not_a_validation_error(self, service, chat_client, login_account):
        with pytest.raises(ValueError):
            service.create(create_payload(dateOfJoining='not a date'))
        assert not Employee.objects.exists()
        chat_client.create_user.assert_not_called()

    def test_provisioning_failure_keeps_the_record(self, service, chat_client, login_account):
        chat_client.create_user.side_effect = RuntimeError('chat down')

        with pytest.raises(RuntimeError):
            service.create(create_payload())

        assert Employee.objects.filter(pk=101).exists()

    def test_concurrent_insert_reported_as_conflict(self, chat_client, login_account):
        make_employee(101, username='jdoe')

        class RacingEmployees:
            """Misses the row on the first lookup, as if it was inserted right after."""

            def __init__(self):
                self.lookups = 0

            def filter(self, **kwargs):
                self.lookups += 1
                if self.lookups == 1:
                    return Employee.objects.none()
                return Employee.objects.filter(**kwargs)

            def create(self, **kwargs):
                return Employee.objects.create(**kwargs)

        service = EmployeeRecordService(RacingEmployees(), User.objects, chat_client)

        with pytest.raises(ConflictError):
            service.create(create_payload())
        chat_client.create_user.assert_not_called()


class TestList:
    def test_pagination_metadata(self, service):
        for emp_id in range(1, 46):
            make_employee(emp_id)

        first = service.list('1')
        assert first['currentPage'] == 1
        assert first['totalPages'] == 3
        assert first['employeeCount'] == 45
        assert len(first['employees']) == 20

        last = service.list('3')
        assert len(last['employees']) == 5

    def test_page_past_the_end_is_empty(self, service):
        for emp_id in range(1, 46):
            make_employee(emp_id)

        result = service.list('4')

        assert result['employees'] == []
        assert result['employeeCount'] == 45
        assert result['totalPages'] == 3
        assert result['currentPage'] == 4

    @pytest.mark.parametrize('page', [None, '', 'abc', '0', '-3'])
    def test_page_defaults_to_one(self, service, page):
        make_employee(1)
        result = service.list(page)
        assert result['currentPage'] == 1
        assert len(result['employees']) == 1

    def test_empty_store(self, service):
        assert service.list() == {
            'currentPage': 1,
            'totalPages': 0,
            'employeeCount': 0,
            'employees': [],
        }


class TestGetOne:
    def test_returns_record(self, service):
        make_employee(7)
        assert service.get_one('7').emp_id == 7

    @pytest.mark.parametrize('emp_id', ['0', 'abc', '', None])
    def test_invalid_id(self, service, emp_id):
        with pytest.raises(ValidationError) as exc:
            service.get_one(emp_id)
        assert exc.value.message == 'Emp Id is missing or invalid.'

    def test_leading_digits_are_used(self, service):
        make_employee(12)
        assert service.get_one('12abc').emp_id == 12

    def test_missing_record(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.get_one('999')
        assert exc.value.status_code == 404


class TestUpdate:
    def test_overwrites_only_supplied_fields(self, service):
        make_employee(5, name='Jane', age=41, designation='Engineer')

        employee = service.update('5', {
            'designation': 'Lead',
            'dateOfJoining': '2023-06-01T09:30:00Z',
            'name': 'Renamed',
            'age': 20,
            'role': 'admin',
            'username': 'other',
        })

        assert employee.designation == 'Lead'
        assert employee.date_of_joining == datetime(2023, 6, 1, 9, 30, tzinfo=timezone.utc)
        assert employee.name == 'Jane'
        assert employee.age == 41
        assert employee.role == 'dev'
        assert employee.username == 'user5'
        assert employee.salary == 1000

    def test_empty_body_changes_nothing(self, service):
        before = make_employee(5)

        after = service.update('5', {})

        for field in Employee.UPDATABLE_FIELDS:
            assert getattr(after, field) == getattr(before, field)

    def test_falsy_values_are_ignored(self, service):
        # zero and empty strings cannot clear a field through update
        make_employee(5, salary=1000, gender='F')

        employee = service.update('5', {'salary': 0, 'gender': '', 'companyEmail': None})

        assert employee.salary == 1000
        assert employee.gender == 'F'
        assert employee.company_email == 'user5@x.com'

    def test_accepted_keys_follow_model_fields(self):
        assert UPDATABLE_INPUTS == {
            'companyEmail': 'company_email',
            'designation': 'designation',
            'salary': 'salary',
            'gender': 'gender',
            'dateOfJoining': 'date_of_joining',
        }
        assert tuple(UPDATABLE_INPUTS.values()) == Employee.UPDATABLE_FIELDS

    def test_missing_record(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.update('5', {'salary': 10})
        assert exc.value.message == 'Employee not found'

    def test_invalid_id(self, service):
        with pytest.raises(ValidationError) as exc:
            service.update('0', {'salary': 10})
        assert exc.value.message == 'Employee Id is missing or invalid.'


class TestDelete:
    def test_removes_employee_and_login_account(self, service, login_account):
        make_employee(101, username='jdoe')

        service.delete('101')

        assert not Employee.objects.filter(pk=101).exists()
        assert not User.objects.filter(pk=101).exists()
        with pytest.raises(NotFoundError):
            service.get_one('101')

    def test_missing_record(self, service, login_account):
        with pytest.raises(NotFoundError):
            service.delete('101')
        assert User.objects.filter(pk=101).exists()

    def test_login_account_failure_rolls_back(self, chat_client, login_account):
        make_employee(101, username='jdoe')
        accounts = mock.Mock()
        accounts.filter.return_value.delete.side_effect = DatabaseError('boom')
        service = EmployeeRecordService(Employee.objects, accounts, chat_client)

        with pytest.raises(DatabaseError):
            service.delete('101')

        assert Employee.objects.filter(pk=101).exists()
        assert User.objects.filter(pk=101).exists()
