import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from dateutil.parser import isoparse

from .status import EventStatus, classify

logger = logging.getLogger(__name__)


class EventsClientError(Exception):
    """Raised when the API reports a failure or answers with something unexpected."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EventsClient:
    """Client for the /events API."""

    def __init__(self, base_url: str, timeout: int = 30, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_events(self) -> List[Dict[str, Any]]:
        """Fetch all events, newest first."""
        return self._request("GET", "/events", failure="Failed to fetch events")

    def get_event(self, event_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/events/{event_id}", failure="Failed to fetch event")

    def create_event(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an event.

        Args:
            data: title, description, date (ISO string) and location

        Returns:
            The stored event, including its assigned id and timestamps

        Raises:
            EventsClientError: If the API rejects the event
        """
        return self._request("POST", "/events", json=data, failure="Failed to create event")

    def update_event(self, event_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/events/{event_id}", json=data, failure="Failed to update event"
        )

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", f"/events/{event_id}", failure="Failed to delete event")

    def search_events(self, term: str) -> List[Dict[str, Any]]:
        """Events whose title contains `term`, ignoring case."""
        needle = term.lower()
        return [ev for ev in self.get_events() if needle in ev["title"].lower()]

    def status_counts(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """
        Number of upcoming, ongoing and past events, classified against
        `now` (the current time by default) rather than the server clock.
        """
        counts = {s.value: 0 for s in (EventStatus.UPCOMING, EventStatus.ONGOING, EventStatus.PAST)}
        for ev in self.get_events():
            counts[classify(isoparse(ev["date"]), now).value] += 1
        return counts

    def _request(self, method: str, path: str, failure: str, json=None) -> Any:
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if json is not None:
            kwargs["json"] = json
        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            logger.error(f"{failure}: {e}")
            raise EventsClientError(failure) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict) or "success" not in body:
            raise EventsClientError(failure, response.status_code)
        if not body["success"]:
            raise EventsClientError(body.get("error") or failure, response.status_code)
        return body.get("data")
