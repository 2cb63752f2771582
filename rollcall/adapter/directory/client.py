"""User directory client implementation.

Talks JSON over HTTP to the directory service that owns user accounts.
"""

import json
import secrets
from typing import Any
from urllib.parse import quote

import httpx
import logfire
from pydantic import ValidationError

from rollcall.adapter.error import DirectoryError, DirectoryResponseError
from rollcall.domain.error import IdentityRejectedError
from rollcall.domain.model.identity import Identity
from rollcall.domain.service.directory import DirectoryClient
from rollcall.domain.value import UserUid

# Request and response bodies wrap a user under this key
ROOT_ELEMENT = "user"

# Statuses that mean a token was not recognised
_UNRECOGNISED = {401, 403, 404}


def _normalise_errors(body: Any) -> dict[str, list[str]]:
    """Field errors from a 422 body, as field name -> messages."""
    errors = body.get("errors", body) if isinstance(body, dict) else body
    if isinstance(errors, dict):
        normalised = {}
        for field, messages in errors.items():
            if not isinstance(messages, list):
                messages = [messages]
            normalised[str(field)] = [str(m) for m in messages]
        return normalised
    if isinstance(errors, list):
        return {"base": [str(m) for m in errors]}
    return {"base": [str(errors)]}


class HttpDirectoryClient(DirectoryClient):
    """Directory client over HTTP.

    A 404 means "no such user" and is returned as None. A 422 carries the
    directory's field errors and is raised as ``IdentityRejectedError``. Any
    other failure is raised as ``DirectoryError``.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize directory client.

        Args:
            base_url: Directory service URL (e.g. "https://directory.example.org")
            api_token: Optional bearer token sent with every request
            timeout: Request timeout in seconds
            http_client: Shared client to use instead of one per request
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                return await self._http_client.request(
                    method,
                    url,
                    params=params,
                    json=body,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            async with httpx.AsyncClient() as client:
                return await client.request(
                    method,
                    url,
                    params=params,
                    json=body,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Directory request failed", method=method, path=path, error=str(e)
            )
            raise DirectoryError(f"Directory request failed: {e}") from e

    async def _request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the reply.

        Returns:
            Decoded JSON body, or None on 404

        Raises:
            IdentityRejectedError: On 422
            DirectoryError: On any other failure status
            DirectoryResponseError: If the body is not valid JSON
        """
        response = await self._request(method, path, params=params, body=body)

        if response.status_code == 404:
            return None

        if response.status_code == 422:
            try:
                errors = _normalise_errors(response.json())
            except json.JSONDecodeError:
                errors = {"base": [response.text or "Unprocessable entity"]}
            raise IdentityRejectedError(errors)

        if response.status_code >= 400:
            logfire.error(
                "Directory returned an error",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise DirectoryError(
                f"Directory {method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except json.JSONDecodeError as e:
            logfire.error(
                "Directory returned invalid JSON", method=method, path=path
            )
            raise DirectoryResponseError(
                f"Invalid JSON from directory {method} {path}",
                status_code=response.status_code,
            ) from e

    def _identity(self, data: Any) -> Identity:
        if isinstance(data, dict) and isinstance(data.get(ROOT_ELEMENT), dict):
            data = data[ROOT_ELEMENT]
        try:
            return Identity.model_validate(data)
        except ValidationError as e:
            raise DirectoryResponseError(f"Unreadable directory user: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request_json("GET", path, params=params)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request_json("POST", path, body=body)

    async def find_by_uid(self, uid: UserUid) -> Identity | None:
        data = await self.get(f"/api/users/{quote(uid, safe='')}.json")
        if data is None:
            return None
        return self._identity(data)

    async def find_by_email(self, email: str) -> Identity | None:
        data = await self.get("/api/users.json", params={"email": email})
        if data is None:
            return None
        if isinstance(data, dict):
            data = data.get("users", [])
        if not isinstance(data, list):
            raise DirectoryResponseError("Expected a list of directory users")
        if not data:
            return None
        return self._identity(data[0])

    async def create(self, attributes: dict[str, Any]) -> Identity:
        data = await self.post("/api/users.json", {ROOT_ELEMENT: attributes})
        if data is None:
            raise DirectoryError("Directory user endpoint not found", status_code=404)
        identity = self._identity(data)
        logfire.info("Directory user created remotely", uid=identity.uid)
        return identity

    async def update(self, uid: UserUid, attributes: dict[str, Any]) -> Identity:
        data = await self._request_json(
            "PUT",
            f"/api/users/{quote(uid, safe='')}.json",
            body={ROOT_ELEMENT: attributes},
        )
        if data is None:
            raise DirectoryError(f"Directory user {uid} not found", status_code=404)
        return self._identity(data)

    async def authenticate_by_token(self, token: str) -> Identity | None:
        """Exchange a token for its user.

        An unrecognised token, or a reply that cannot be read as a user,
        means no one is authenticated.
        """
        response = await self._request(
            "GET", f"/api/authenticate/{quote(token, safe='')}"
        )
        if response.status_code in _UNRECOGNISED:
            return None
        if response.status_code >= 400:
            raise DirectoryError(
                f"Directory authentication failed: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return self._identity(response.json())
        except (json.JSONDecodeError, DirectoryResponseError) as e:
            logfire.warn("Unreadable authentication reply", error=str(e))
            return None

    async def deauthenticate(self, token: str) -> None:
        await self._request_json(
            "POST", f"/api/deauthenticate/{quote(token, safe='')}"
        )


class MockDirectoryClient(DirectoryClient):
    """In-memory directory for testing.

    Users live in a dict keyed by uid. Tokens are issued with ``issue_token``.
    Set ``reject_with`` to make the next saves fail validation, or
    ``fail_lookups`` to make lookups raise as if the directory were down.
    """

    def __init__(self) -> None:
        """Initialize mock directory without a real service."""
        self.users: dict[str, Identity] = {}
        self.tokens: dict[str, str] = {}
        self.reject_with: dict[str, list[str]] | None = None
        self.fail_lookups = False
        self.calls: dict[str, int] = {}
        self.saved: list[dict[str, Any]] = []

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def add_user(self, **attributes: Any) -> Identity:
        """Put a user straight into the directory."""
        if not attributes.get("uid"):
            attributes["uid"] = secrets.token_hex(8)
        identity = Identity.model_validate(attributes)
        self.users[identity.uid] = identity
        return identity

    def issue_token(self, uid: str) -> str:
        """Issue a one-time token for a user."""
        token = secrets.token_urlsafe(16)
        self.tokens[token] = uid
        return token

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        raise DirectoryError(f"Mock directory does not serve {path}")

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        raise DirectoryError(f"Mock directory does not serve {path}")

    async def find_by_uid(self, uid: UserUid) -> Identity | None:
        self._count("find_by_uid")
        if self.fail_lookups:
            raise DirectoryError("Mock directory is down")
        return self.users.get(uid)

    async def find_by_email(self, email: str) -> Identity | None:
        self._count("find_by_email")
        if self.fail_lookups:
            raise DirectoryError("Mock directory is down")
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, attributes: dict[str, Any]) -> Identity:
        self._count("create")
        if self.reject_with is not None:
            raise IdentityRejectedError(self.reject_with)
        if not attributes.get("email"):
            raise IdentityRejectedError({"email": ["can't be blank"]})
        self.saved.append(dict(attributes))
        return self.add_user(**attributes)

    async def update(self, uid: UserUid, attributes: dict[str, Any]) -> Identity:
        self._count("update")
        if self.reject_with is not None:
            raise IdentityRejectedError(self.reject_with)
        existing = self.users.get(uid)
        if existing is None:
            raise DirectoryError(f"Directory user {uid} not found", status_code=404)
        self.saved.append({"uid": uid, **attributes})
        updated = Identity.model_validate({**existing.model_dump(), **attributes})
        self.users[uid] = updated
        return updated

    async def authenticate_by_token(self, token: str) -> Identity | None:
        self._count("authenticate_by_token")
        uid = self.tokens.pop(token, None)
        if uid is None:
            return None
        return self.users.get(uid)

    async def deauthenticate(self, token: str) -> None:
        self._count("deauthenticate")
        self.tokens.pop(token, None)
