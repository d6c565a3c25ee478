"""WasteWise API client.

A thin synchronous wrapper around the WasteWise REST API built on the
``requests`` library.  The underlying :class:`requests.Session` keeps
the session cookie set by :meth:`WasteWiseAPI.register` or
:meth:`WasteWiseAPI.login`, so calls made afterwards are authenticated.

Every method returns a tuple ``(data, error)``.  On success ``data``
holds the decoded JSON body and ``error`` is ``None``; on failure
``data`` is ``None`` (or an empty list for list endpoints) and
``error`` is a dictionary with ``status_code``, ``message`` and, for
validation failures, ``errors``.  The client never raises for HTTP or
transport errors.

Example::

    api = WasteWiseAPI(base_url="http://localhost:8000")
    user, err = api.login("demouser", "password123")
    items, err = api.list_items(latitude=37.77, longitude=-122.42, radius=5)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]
ListResult = Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]


class WasteWiseAPI:
    """Client for the WasteWise REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix the API is mounted under.
            timeout: Timeout in seconds for every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/items``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            return None, self._describe_http_error(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _describe_http_error(exc: requests.HTTPError) -> Dict[str, Any]:
        response = exc.response
        status = response.status_code if response is not None else None
        error: Dict[str, Any] = {"status_code": status, "message": ""}
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                error["message"] = body.get("message") or body.get("detail") or ""
                if "errors" in body:
                    error["errors"] = body["errors"]
            elif response.text:
                error["message"] = response.text
        if not error["message"]:
            error["message"] = str(exc)
        logger.error("API request failed (%s): %s", status, error["message"])
        return error

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> ListResult:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, payload: Dict[str, Any]) -> Result:
        """Create an account and keep its session.

        Args:
            payload: ``username``, ``password``, ``name``, ``email`` and
                optional profile fields.
        """
        return self._request("POST", "/register", json_body=payload)

    def login(self, username: str, password: str) -> Result:
        return self._request("POST", "/login", json_body={"username": username, "password": password})

    def logout(self) -> Result:
        return self._request("POST", "/logout")

    def current_user(self) -> Result:
        return self._request("GET", "/user")

    def update_profile(self, changes: Dict[str, Any]) -> Result:
        return self._request("PATCH", "/user", json_body=changes)

    def get_user(self, user_id: int) -> Result:
        return self._request("GET", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def list_items(
        self,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        radius: Optional[float] = None,
        category: Optional[str] = None,
    ) -> ListResult:
        """Browse available listings, optionally near a point."""
        return self._list(
            "/items",
            {"latitude": latitude, "longitude": longitude, "radius": radius, "category": category},
        )

    def get_item(self, item_id: int) -> Result:
        """Fetch a listing.  The server counts this as a view."""
        return self._request("GET", f"/items/{item_id}")

    def create_item(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/items", json_body=payload)

    def update_item(self, item_id: int, changes: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/items/{item_id}", json_body=changes)

    def delete_item(self, item_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/items/{item_id}")
        return error is None, error

    def list_user_items(self, user_id: int) -> ListResult:
        return self._list(f"/users/{user_id}/items")

    # ------------------------------------------------------------------
    # Chats and messages
    # ------------------------------------------------------------------
    def create_chat(self, other_user_id: int, item_id: Optional[int] = None) -> Result:
        """Open (or reuse) a chat with another user about a listing."""
        payload: Dict[str, Any] = {"userId2": other_user_id}
        if item_id is not None:
            payload["itemId"] = item_id
        return self._request("POST", "/chats", json_body=payload)

    def list_chats(self, user_id: int) -> ListResult:
        """Enriched chats of the signed-in user, most recent first."""
        return self._list(f"/users/{user_id}/chats")

    def send_message(self, chat_id: int, content: str) -> Result:
        return self._request("POST", "/messages", json_body={"chatId": chat_id, "content": content})

    def list_messages(self, chat_id: int) -> ListResult:
        return self._list(f"/chats/{chat_id}/messages")

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------
    def list_disposal_centers(
        self,
        *,
        center_type: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        radius: Optional[float] = None,
    ) -> ListResult:
        return self._list(
            "/disposal-centers",
            {"type": center_type, "latitude": latitude, "longitude": longitude, "radius": radius},
        )

    def list_events(self) -> ListResult:
        """Upcoming community events, soonest first."""
        return self._list("/events")
