"""
HTTP client for the practice notes REST API.

One method per endpoint. Each method builds the full URL, attaches the
``x-auth-token`` header when the endpoint requires authentication, sends
a JSON body and returns the raw ``requests.Response`` unmodified, so
status codes and bodies are left to the calling test to assert on.

Only :meth:`NotesApiClient.extract_token` and
:meth:`NotesApiClient.extract_note_id` interpret a response; both raise
instead of returning an empty value when the expected field is missing.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from config import Config

logger = logging.getLogger(__name__)


class NotesApiError(Exception):
    """Base error for responses the client cannot interpret."""


class InvalidLoginResponseError(NotesApiError):
    """Raised when a login response carries no ``data.token``."""


class InvalidNoteResponseError(NotesApiError):
    """Raised when a note response carries no ``data.id``."""


def _mask_token(token: str) -> str:
    """Shorten a token for log output."""
    return f"{token[:20]}..." if token else "MISSING"


def _safe_json(response: requests.Response) -> Any:
    """Return the parsed body, or ``None`` if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


class NotesApiClient:
    """
    Thin wrapper around the notes API.

    Attributes:
        session: HTTP session used for every request.
        base_url: API root, e.g. ``https://practice.expandtesting.com/notes/api``.
        timeout: Timeout in seconds passed to every request.
    """

    AUTH_HEADER = "x-auth-token"

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str = Config.API_BASE_URL,
        timeout: float = Config.HTTP_TIMEOUT_S,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {self.AUTH_HEADER: token}

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def health_check(self) -> requests.Response:
        """Check that the API is running."""
        return self.session.get(self._url("/health-check"), timeout=self.timeout)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def register_user(self, email: str, name: str, password: str) -> requests.Response:
        """Register a new user."""
        return self.session.post(
            self._url("/users/register"),
            json={"email": email, "name": name, "password": password},
            timeout=self.timeout,
        )

    def login(self, email: str, password: str) -> requests.Response:
        """Log in; the token is in ``data.token`` of the response body."""
        return self.session.post(
            self._url("/users/login"),
            json={"email": email, "password": password},
            timeout=self.timeout,
        )

    def get_profile(self, token: str) -> requests.Response:
        """Fetch the profile of the authenticated user."""
        return self.session.get(
            self._url("/users/profile"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def change_password(
        self, token: str, current_password: str, new_password: str
    ) -> requests.Response:
        """Change the password of the authenticated user."""
        return self.session.post(
            self._url("/users/change-password"),
            json={"currentPassword": current_password, "newPassword": new_password},
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def logout(self, token: str) -> requests.Response:
        """Invalidate the given token."""
        return self.session.delete(
            self._url("/users/logout"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def delete_account(self, token: str) -> requests.Response:
        """Delete the authenticated user and all of their notes."""
        return self.session.delete(
            self._url("/users/delete-account"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    def create_note(
        self, token: str, title: str, description: str, category: str
    ) -> requests.Response:
        """Create a note. ``category`` must be Home, Work or Personal."""
        url = self._url("/notes")
        body = {"title": title, "description": description, "category": category}
        logger.debug(
            "Create note request: url=%s token=%s body=%s", url, _mask_token(token), body
        )

        response = self.session.post(
            url, json=body, headers=self._auth_headers(token), timeout=self.timeout
        )

        logger.debug("Create note response status: %s", response.status_code)
        return response

    def get_notes(self, token: str) -> requests.Response:
        """List all notes of the authenticated user."""
        return self.session.get(
            self._url("/notes"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def get_note_by_id(self, token: str, note_id: str) -> requests.Response:
        """Fetch a single note."""
        return self.session.get(
            self._url(f"/notes/{note_id}"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def update_note(
        self,
        token: str,
        note_id: str,
        title: str,
        description: str,
        category: str,
        completed: bool = False,
    ) -> requests.Response:
        """
        Replace a note.

        The API rejects updates without a category, so it is required here
        even when only the title or description changes.
        """
        url = self._url(f"/notes/{note_id}")
        body = {
            "title": title,
            "description": description,
            "category": category,
            "completed": completed,
        }
        logger.debug(
            "Update note request: url=%s token=%s body=%s", url, _mask_token(token), body
        )

        response = self.session.put(
            url, json=body, headers=self._auth_headers(token), timeout=self.timeout
        )

        logger.debug("Update note response status: %s", response.status_code)
        return response

    def set_note_completed(self, token: str, note_id: str, completed: bool) -> requests.Response:
        """Toggle only the completion flag of a note."""
        return self.session.patch(
            self._url(f"/notes/{note_id}"),
            json={"completed": completed},
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    def delete_note(self, token: str, note_id: str) -> requests.Response:
        """Delete a note."""
        return self.session.delete(
            self._url(f"/notes/{note_id}"),
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )

    # -------------------------------------------------------------------------
    # Response helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def extract_token(login_response: requests.Response) -> str:
        """
        Extract the auth token from a login response.

        Args:
            login_response: Response returned by :meth:`login`.

        Returns:
            The non-empty token string.

        Raises:
            InvalidLoginResponseError: If the body is not JSON or has no
                ``data.token``.
        """
        body = _safe_json(login_response)
        data = body.get("data") if isinstance(body, dict) else None
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise InvalidLoginResponseError(
                f"Invalid login response structure. Response: {json.dumps(body)}"
            )
        return token

    @staticmethod
    def extract_note_id(note_response: requests.Response) -> str:
        """
        Extract the note id from a create/get/update response.

        Raises:
            InvalidNoteResponseError: If the body has no ``data.id``.
        """
        body = _safe_json(note_response)
        data = body.get("data") if isinstance(body, dict) else None
        note_id = data.get("id") if isinstance(data, dict) else None
        if not note_id:
            raise InvalidNoteResponseError(
                f"Invalid note response structure. Response: {json.dumps(body)}"
            )
        return str(note_id)
