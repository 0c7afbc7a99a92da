from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import User


class RegisterTests(APITestCase):
    def setUp(self):
        self.url = reverse('register')

    def test_register_creates_login_account(self):
        response = self.client.post(self.url, {
            'username': 'jdoe',
            'password': 'secret-pass',
            'email': 'jdoe@example.com',
            'first_name': 'John',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(username='jdoe')
        self.assertEqual(response.data['user']['id'], user.id)
        self.assertEqual(user.email, 'jdoe@example.com')
        self.assertTrue(user.check_password('secret-pass'))

    def test_username_and_password_required(self):
        response = self.client.post(self.url, {'username': 'jdoe'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.exists())

    def test_duplicate_username(self):
        User.objects.create_user(username='jdoe', password='secret-pass')
        response = self.client.post(self.url, {'username': 'jdoe', 'password': 'other-pass'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(User.objects.count(), 1)


class LoginTests(APITestCase):
    def setUp(self):
        self.url = reverse('login')
        self.user = User.objects.create_user(username='jdoe', password='secret-pass')

    def test_login_returns_token_pair(self):
        response = self.client.post(self.url, {'username': 'jdoe', 'password': 'secret-pass'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['username'], 'jdoe')

    def test_wrong_password(self):
        response = self.client.post(self.url, {'username': 'jdoe', 'password': 'nope'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_inactive_account(self):
        self.user.active = False
        self.user.save()
        response = self.client.post(self.url, {'username': 'jdoe', 'password': 'secret-pass'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_credentials(self):
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
