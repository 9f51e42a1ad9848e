import json
import logging
from typing import Optional

from inventory.client.api import LOGIN_PATH, ApiClient
from inventory.client.storage import TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)


class AuthClient:
    """Login/logout and access to the stored credentials."""

    def __init__(self, api: ApiClient):
        self.api = api

    def login(self, email: str, password: str) -> dict:
        """
        Log in and persist the returned token and user.

        Raises:
            ApiError: With the server's error body on failure
        """
        data = self.api.post(LOGIN_PATH, json={"email": email, "password": password}).json()

        self.api.storage.set(TOKEN_KEY, data["token"])
        self.api.storage.set(USER_KEY, json.dumps(data["user"]))
        return data

    def logout(self) -> None:
        self.api.clear_credentials()

    def get_token(self) -> Optional[str]:
        return self.api.storage.get(TOKEN_KEY)

    def get_user(self) -> Optional[dict]:
        raw = self.api.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user data is not valid JSON")
            return None

    def is_authenticated(self) -> bool:
        return bool(self.get_token())
