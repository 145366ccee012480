"""Strong backend API client."""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from strong_mcp.strong.auth import DEFAULT_HEADERS, StrongAuth
from strong_mcp.strong.exceptions import APIError, AuthenticationError, PayloadError
from strong_mcp.strong.models import MeasurementsResponse, UserResponse, merge_pages

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Include(str, Enum):
    """Collections that can be embedded in the user response."""
    LOG = "log"
    MEASUREMENT = "measurement"
    TAG = "tag"
    WIDGET = "widget"
    TEMPLATE = "template"
    FOLDER = "folder"
    MEASURED_VALUE = "measuredValue"


def parse_payload(model: type[ModelT], data, payload: str) -> ModelT:
    """Validate decoded JSON against ``model``, raising ``PayloadError`` on mismatch."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise PayloadError(payload, str(exc)) from exc


class StrongClient:
    """Client for the Strong backend REST API."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport
        self._auth = StrongAuth(base_url, transport=transport)

    @property
    def is_authenticated(self) -> bool:
        return self._auth.is_authenticated

    @property
    def user_id(self) -> str | None:
        return self._auth.user_id

    async def login(self, username: str, password: str) -> None:
        await self._auth.login(username, password)

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        if not self._auth.is_authenticated:
            raise AuthenticationError("Not authenticated. Call login() first.")

        async with httpx.AsyncClient(
            base_url=self._auth.base_url,
            headers=DEFAULT_HEADERS,
            timeout=30,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method, path, headers=self._auth.get_auth_header(), **kwargs,
            )

            if response.status_code == 401:
                logger.info("Access token rejected, refreshing")
                await self._auth.refresh()
                response = await client.request(
                    method, path, headers=self._auth.get_auth_header(), **kwargs,
                )

            if response.status_code >= 400:
                raise _api_error(response)

            try:
                return response.json()
            except ValueError as exc:
                raise PayloadError(path, "response body is not JSON") from exc

    async def get_user(
        self,
        continuation: str = "",
        limit: int = 500,
        includes: Iterable[Include] = (Include.LOG,),
    ) -> UserResponse:
        """Fetch the user document with the requested collections embedded."""
        params: list[tuple[str, str]] = [
            ("limit", str(limit)),
            ("continuation", continuation),
        ]
        params.extend(("include", Include(i).value) for i in includes)

        data = await self._request("GET", f"api/users/{self._auth.user_id}", params=params)
        return parse_payload(UserResponse, data, "user response")

    async def get_measurements(self, page: int) -> MeasurementsResponse:
        """Fetch one page of the measurement catalog."""
        data = await self._request("GET", "api/measurements", params={"page": page})
        return parse_payload(MeasurementsResponse, data, f"measurements page {page}")

    async def get_catalog(
        self,
        pages: int = 2,
        cache_path: Path | str | None = None,
    ) -> MeasurementsResponse:
        """Return the merged catalog, reading/writing ``cache_path`` when given."""
        cache = Path(cache_path) if cache_path is not None else None

        if cache is not None and cache.exists():
            logger.info("Reading measurements from %s", cache)
            try:
                return MeasurementsResponse.model_validate_json(cache.read_text(encoding="utf-8"))
            except ValidationError as exc:
                raise PayloadError(f"measurements cache {cache}", str(exc)) from exc

        logger.info("Fetching %d measurement pages from API", pages)
        fetched = [await self.get_measurements(page) for page in range(1, pages + 1)]
        merged = merge_pages(fetched)

        if cache is not None:
            cache.parent.mkdir(parents=True, exist_ok=True)
            cache.write_text(merged.model_dump_json(by_alias=True), encoding="utf-8")

        return merged

    def get_auth_state(self) -> dict:
        return self._auth.to_dict()

    def restore_auth_state(self, state: dict) -> None:
        self._auth = StrongAuth.from_dict(self._auth.base_url, state, transport=self._transport)


def _api_error(response: httpx.Response) -> APIError:
    code = description = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        code = body.get("code")
        description = body.get("description")
    message = f"{code}: {description}" if description else response.text
    return APIError(
        f"API request failed: {message}",
        status_code=response.status_code,
        code=code,
        description=description,
    )
