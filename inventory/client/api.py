import logging
from typing import Any, Callable, Optional

import httpx

from inventory.client.storage import TOKEN_KEY, USER_KEY, TokenStorage
from inventory.config import get_settings

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
CONNECTION_ERROR = "Erro de conexão com o servidor"


class ApiError(Exception):
    """Non-2xx response (or transport failure) from the inventory API."""

    def __init__(
        self,
        error: str,
        status_code: Optional[int] = None,
        details: Optional[list[str]] = None,
    ):
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.details = details or []

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"error": self.error}
        if self.details:
            data["details"] = self.details
        return data


class ApiClient:
    """
    HTTP client for the inventory API.

    Attaches the stored bearer token to every request. A 401 from any request
    clears the stored credentials and, unless the request was the login call
    itself, calls ``on_unauthorized`` (the "go to login" hook).
    """

    def __init__(
        self,
        storage: TokenStorage,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        timeout: float = 10.0,
    ):
        self.storage = storage
        self.on_unauthorized = on_unauthorized
        self.http = http or httpx.Client(
            base_url=base_url or get_settings().API_BASE_URL,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request and return the response if it succeeded.

        Raises:
            ApiError: On any non-2xx status or transport failure
        """
        headers = dict(kwargs.pop("headers", None) or {})
        token = self.storage.get(TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(CONNECTION_ERROR) from e

        if response.status_code == 401:
            self.clear_credentials()
            if path != LOGIN_PATH and self.on_unauthorized is not None:
                self.on_unauthorized()

        if response.is_error:
            raise self._to_error(response)
        return response

    def clear_credentials(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)

    def get(self, path: str, **kwargs) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> httpx.Response:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        self.http.close()

    @staticmethod
    def _to_error(response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return ApiError(body["error"], response.status_code, body.get("details"))
        return ApiError(f"HTTP {response.status_code}", response.status_code)
