"""
HTTP client for the auth service.

Thin wrapper used by front-end tooling and other services to sign users up,
log them in and check tokens without hand-building requests.
"""

from typing import Any, Dict, Optional

import httpx


class AuthClientError(Exception):
    """Raised for any non-2xx answer from the auth service."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def signup(self, name: str, email: str, password: str) -> Dict[str, Any]:
        response = self._client.post(
            "/api/signup", json={"name": name, "email": email, "password": password}
        )
        return self._json(response, "Registration failed")

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Returns ``{"user": {...}, "token": "...", "tokenType": "bearer"}``."""
        response = self._client.post("/api/login", json={"email": email, "password": password})
        return self._json(response, "Login failed")

    def validate_token(self, token: str) -> Dict[str, Any]:
        response = self._client.post("/api/auth/validate", headers=self._bearer(token))
        return self._json(response, "Invalid token")

    def logout(self, token: str) -> None:
        response = self._client.post("/api/auth/logout", headers=self._bearer(token))
        self._json(response, "Logout failed")

    @staticmethod
    def _bearer(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _json(response: httpx.Response, default_error: str) -> Dict[str, Any]:
        if response.is_success:
            return response.json()
        try:
            message = response.json().get("error") or default_error
        except ValueError:
            message = default_error
        raise AuthClientError(response.status_code, message)
