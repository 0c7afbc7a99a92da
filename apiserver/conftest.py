from unittest import mock

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    settings.SENDBIRD_APP_ID = ''


@pytest.fixture
def chat_client():
    return mock.Mock(name='chat_client')


@pytest.fixture
def service(chat_client):
    from accounts.models import User
    from employees.models import Employee
    from employees.services import EmployeeRecordService

    return EmployeeRecordService(
        employees=Employee.objects,
        accounts=User.objects,
        chat_client=chat_client,
    )


@pytest.fixture
def login_account(db):
    from accounts.models import User

    return User.objects.create_user(username='jdoe', password='secret-pass', id=101)
