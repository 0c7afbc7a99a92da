import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ChatProvisioningError(Exception):
    """Raised when the chat service refuses to create a user."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class SendbirdClient:
    """
    Minimal client for the Sendbird Platform API.

    Only user creation is needed: every new employee gets a chat user whose
    id is the empId and whose nickname is the login username.
    """

    def __init__(self, app_id, api_token, timeout=10):
        self.app_id = app_id
        self.api_token = api_token
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        return cls(
            app_id=settings.SENDBIRD_APP_ID,
            api_token=settings.SENDBIRD_API_TOKEN,
            timeout=settings.SENDBIRD_TIMEOUT,
        )

    @property
    def enabled(self):
        return bool(self.app_id)

    @property
    def base_url(self):
        return f"https://api-{self.app_id}.sendbird.com/v3"

    def create_user(self, user_id, nickname):
        """
        Register a chat user.

        Args:
            user_id: external id of the user (the empId)
            nickname: display name shown in chat (the username)

        Returns:
            dict: the user object returned by Sendbird, or None when the
            client is not configured
        """
        if not self.enabled:
            logger.warning(f"SENDBIRD_APP_ID not set, skipping chat user for {user_id}")
            return None

        response = requests.post(
            f"{self.base_url}/users",
            json={
                'user_id': str(user_id),
                'nickname': nickname,
                'profile_url': '',
            },
            headers={
                'Api-Token': self.api_token,
                'Content-Type': 'application/json; charset=utf8',
            },
            timeout=self.timeout,
        )

        if not response.ok:
            logger.error(f"Sendbird user creation failed for {user_id}: {response.status_code} {response.text}")
            raise ChatProvisioningError(
                f"Sendbird user creation failed with status {response.status_code}",
                status_code=response.status_code,
            )

        logger.info(f"Sendbird user created: {user_id}")
        return response.json()
