"""Strong backend authentication."""

import httpx
from pydantic import ValidationError

from strong_mcp.strong.exceptions import AuthenticationError, TokenExpiredError
from strong_mcp.strong.models import LoginResponse

DEFAULT_HEADERS = {
    "User-Agent": "Strong Android",
    "Content-Type": "application/json",
    "Accept": "application/json",
    "x-client-build": "600013",
    "x-client-platform": "android",
}


class StrongAuth:
    """Access/refresh token handler for the Strong backend."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/") + "/"
        self._transport = transport
        self.access_token: str | None = None
        self.refresh_token: str | None = None
        self.user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None and self.user_id is not None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=DEFAULT_HEADERS,
            timeout=30,
            transport=self._transport,
        )

    async def login(self, username: str, password: str) -> None:
        async with self._client() as client:
            response = await client.post(
                "auth/login",
                json={
                    "usernameOrEmail": username,
                    "password": password,
                },
            )

            if response.status_code != 200:
                raise AuthenticationError(f"Login failed: {_error_description(response)}")

            self._update_tokens(_parse_login(response))

    async def refresh(self) -> None:
        if not self.access_token or not self.refresh_token:
            raise AuthenticationError("No refresh token available")

        async with self._client() as client:
            response = await client.post(
                "auth/login/refresh",
                headers=self.get_auth_header(),
                json={
                    "accessToken": self.access_token,
                    "refreshToken": self.refresh_token,
                },
            )

            if response.status_code != 200:
                raise TokenExpiredError(f"Failed to refresh token: {_error_description(response)}")

            parsed = _parse_login(response)
            self.access_token = parsed.access_token
            self.refresh_token = parsed.refresh_token

    def _update_tokens(self, parsed: LoginResponse) -> None:
        if not parsed.access_token or not parsed.user_id:
            raise AuthenticationError("Login response did not contain a token and user id")
        self.access_token = parsed.access_token
        self.refresh_token = parsed.refresh_token
        self.user_id = parsed.user_id

    def get_auth_header(self) -> dict[str, str]:
        if not self.access_token:
            raise AuthenticationError("Not authenticated")
        return {"Authorization": f"Bearer {self.access_token}"}

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "user_id": self.user_id,
        }

    @classmethod
    def from_dict(
        cls,
        base_url: str,
        data: dict,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "StrongAuth":
        auth = cls(base_url, transport=transport)
        auth.access_token = data.get("access_token")
        auth.refresh_token = data.get("refresh_token")
        auth.user_id = data.get("user_id")
        return auth


def _parse_login(response: httpx.Response) -> LoginResponse:
    try:
        return LoginResponse.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise AuthenticationError(f"Unexpected login response: {exc}") from exc


def _error_description(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and "description" in data:
        return f"{data.get('code', response.status_code)}: {data['description']}"
    return response.text
