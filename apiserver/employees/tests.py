from unittest import mock

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from .models import Employee
from .services import EmployeeRecordService


class EmployeeAPITestCase(APITestCase):
    def setUp(self):
        self.operator = User.objects.create_user(username='hr-admin', password='secret-pass', id=1)
        self.client.force_authenticate(user=self.operator)

        self.chat_client = mock.Mock(name='chat_client')
        patcher = mock.patch(
            'employees.views.get_employee_service',
            side_effect=lambda: EmployeeRecordService(Employee.objects, User.objects, self.chat_client),
        )
        patcher.start()
        self.addCleanup(patcher.stop)

        self.list_url = reverse('employee-list-create')

    def detail_url(self, emp_id):
        return reverse('employee-detail', args=[emp_id])

    def register_login(self, emp_id=101, username='jdoe'):
        return User.objects.create_user(username=username, password='secret-pass', id=emp_id)

    def payload(self, **overrides):
        data = {
            'empId': 101,
            'username': 'jdoe',
            'companyEmail': 'j@x.com',
            'role': 'dev',
            'designation': 'Engineer',
            'salary': 5000,
            'gender': 'M',
            'age': 30,
            'dateOfJoining': '2024-01-15T00:00:00.000Z',
            'name': 'John Doe',
        }
        data.update(overrides)
        return data


class CreateEmployeeTests(EmployeeAPITestCase):
    def test_create_then_repeat(self):
        self.register_login()

        response = self.client.post(self.list_url, self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Employee Details registered successfully.')
        self.assertEqual(response.data['data']['empId'], 101)
        self.assertEqual(response.data['data']['companyEmail'], 'j@x.com')
        self.assertEqual(response.data['data']['dateOfJoining'], '2024-01-15T00:00:00Z')
        self.chat_client.create_user.assert_called_once_with(101, 'jdoe')

        again = self.client.post(self.list_url, self.payload(), format='json')

        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(again.data, {'message': 'Employee already exists.'})
        self.assertEqual(Employee.objects.filter(pk=101).count(), 1)

    def test_missing_required_fields(self):
        self.register_login()
        for field in ('username', 'companyEmail', 'role'):
            data = self.payload()
            del data[field]
            response = self.client.post(self.list_url, data, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data['message'], 'Username, company email, and role are required.')
        self.assertFalse(Employee.objects.exists())

    def test_not_registered_for_login(self):
        response = self.client.post(self.list_url, self.payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Employee not in the login database.')

    def test_username_mismatch(self):
        self.register_login(username='jane')
        response = self.client.post(self.list_url, self.payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Employee username does not match with login username')

    def test_truncated_json_body_is_a_bad_request(self):
        self.register_login()

        response = self.client.post(self.list_url, '{"username": ', content_type='application/json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Employee.objects.exists())
        self.chat_client.create_user.assert_not_called()

    def test_truncated_json_update_is_a_bad_request(self):
        self.register_login()
        Employee.objects.create(emp_id=101, username='jdoe', company_email='j@x.com', role='dev', salary=5000)

        response = self.client.patch(self.detail_url(101), '{"salary": 1', content_type='application/json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Employee.objects.get(pk=101).salary, 5000)

    def test_fractional_emp_id_is_a_bad_request(self):
        self.register_login()
        response = self.client.post(self.list_url, self.payload(empId=101.9), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'message': 'Emp Id is missing or invalid.'})
        self.assertFalse(Employee.objects.exists())

    def test_invalid_date_is_a_server_error(self):
        self.register_login()
        response = self.client.post(self.list_url, self.payload(dateOfJoining='someday'), format='json')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'message': 'Internal Server Error'})

    def test_chat_failure_is_a_server_error_and_keeps_record(self):
        self.register_login()
        self.chat_client.create_user.side_effect = RuntimeError('sendbird unavailable')

        response = self.client.post(self.list_url, self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'message': 'Internal Server Error'})
        self.assertTrue(Employee.objects.filter(pk=101).exists())


class ListEmployeeTests(EmployeeAPITestCase):
    def setUp(self):
        super().setUp()
        for emp_id in range(1, 42):
            Employee.objects.create(
                emp_id=emp_id, username=f'user{emp_id}',
                company_email=f'user{emp_id}@x.com', role='dev',
            )

    def test_first_page(self):
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['currentPage'], 1)
        self.assertEqual(response.data['totalPages'], 3)
        self.assertEqual(response.data['employeeCount'], 41)
        self.assertEqual(len(response.data['employees']), 20)
        self.assertIn('empId', response.data['employees'][0])

    def test_last_and_out_of_range_pages(self):
        last = self.client.get(self.list_url, {'page': 3})
        self.assertEqual(len(last.data['employees']), 1)

        beyond = self.client.get(self.list_url, {'page': 4})
        self.assertEqual(beyond.status_code, status.HTTP_200_OK)
        self.assertEqual(beyond.data['employees'], [])
        self.assertEqual(beyond.data['employeeCount'], 41)

    def test_non_numeric_page(self):
        response = self.client.get(self.list_url, {'page': 'last'})
        self.assertEqual(response.data['currentPage'], 1)


class EmployeeDetailTests(EmployeeAPITestCase):
    def setUp(self):
        super().setUp()
        self.register_login()
        self.employee = Employee.objects.create(
            emp_id=101, username='jdoe', name='John Doe', company_email='j@x.com',
            role='dev', designation='Engineer', salary=5000, gender='M', age=30,
        )

    def test_get_one(self):
        response = self.client.get(self.detail_url(101))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['employee']['username'], 'jdoe')

    def test_get_missing(self):
        response = self.client.get(self.detail_url(999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'message': 'Employee not found.'})

    def test_get_invalid_ids(self):
        for emp_id in ('0', 'abc'):
            response = self.client.get(self.detail_url(emp_id))
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data, {'message': 'Emp Id is missing or invalid.'})

    def test_patch_updates_mutable_fields(self):
        response = self.client.patch(
            self.detail_url(101),
            {'designation': 'Lead', 'salary': 6000, 'role': 'admin', 'name': 'Other'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Employee updated successfully')
        updated = response.data['updatedEmployee']
        self.assertEqual(updated['designation'], 'Lead')
        self.assertEqual(updated['salary'], 6000)
        self.assertEqual(updated['role'], 'dev')
        self.assertEqual(updated['name'], 'John Doe')

    def test_put_is_also_a_sparse_update(self):
        response = self.client.put(self.detail_url(101), {'gender': 'F'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['updatedEmployee']['gender'], 'F')
        self.assertEqual(response.data['updatedEmployee']['companyEmail'], 'j@x.com')

    def test_empty_update(self):
        response = self.client.patch(self.detail_url(101), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.salary, 5000)
        self.assertEqual(self.employee.designation, 'Engineer')

    def test_zero_salary_is_ignored(self):
        response = self.client.patch(self.detail_url(101), {'salary': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['updatedEmployee']['salary'], 5000)

    def test_update_missing_and_invalid(self):
        missing = self.client.patch(self.detail_url(999), {'salary': 1}, format='json')
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

        invalid = self.client.patch(self.detail_url('x'), {'salary': 1}, format='json')
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(invalid.data, {'message': 'Employee Id is missing or invalid.'})

    def test_delete_removes_employee_and_login(self):
        response = self.client.delete(self.detail_url(101))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data['message'],
            'Employee and associated login record deleted successfully',
        )
        self.assertFalse(User.objects.filter(pk=101).exists())
        self.assertEqual(self.client.get(self.detail_url(101)).status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_missing_and_invalid(self):
        self.assertEqual(self.client.delete(self.detail_url(999)).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(self.detail_url('0')).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Employee.objects.filter(pk=101).exists())


class EmployeeAuthTests(APITestCase):
    def test_requires_authentication(self):
        response = self.client.get(reverse('employee-list-create'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_bearer_token_from_login(self):
        User.objects.create_user(username='hr-admin', password='secret-pass')
        login = self.client.post(
            reverse('login'), {'username': 'hr-admin', 'password': 'secret-pass'}, format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        response = self.client.get(reverse('employee-list-create'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['employeeCount'], 0)
