"""
events_api.py: Client for the organization's REST events API.

The admin console creates events by POSTing the form payload to
``<base>/api/events``. Failures are reported as ``"<status> <message>"`` where
the message is dug out of whichever error shape the API returned. The console
also checks the API health endpoint and whether its admin token is accepted.
"""
from typing import Any, Dict, Optional

import requests

from admin.event_forms import EventForm, build_payload
from utils.environ import BotConfig
from utils.error_handling import ProviderError, TransientIOError
from utils.logging import logger

REQUEST_TIMEOUT = 10


# --- extract_error_message ---
# Picks the most specific message out of an error body:
# detail.error.message, detail.error, detail, error, then the raw text.
def extract_error_message(body: Any, fallback: str) -> str:
    if isinstance(body, str):
        return body or fallback
    if not isinstance(body, dict):
        return fallback
    detail = body.get("detail")
    if isinstance(detail, dict):
        error = detail.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if error:
            return str(error)
    if detail:
        return str(detail)
    if body.get("error"):
        return str(body["error"])
    return fallback


class EventsApiClient:
    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    @classmethod
    def from_config(cls, config: BotConfig) -> "EventsApiClient":
        return cls(config.events_api_url, config.events_api_token)

    def _get(self, path: str) -> requests.Response:
        try:
            return self.session.get(f"{self.base_url}{path}", timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise TransientIOError(f"Events API unreachable: {e}") from e

    # --- check_health ---
    # Returns: True when the API answers its health endpoint with a 2xx status.
    # Raises: TransientIOError when the API cannot be reached.
    def check_health(self) -> bool:
        response = self._get("/api/health")
        logger.info(f"Events API health: {response.status_code}")
        return response.ok

    # --- check_auth ---
    # Asks the API whether the admin token is accepted. Without a token there
    # is nothing to check and the answer is False.
    def check_auth(self) -> bool:
        if not self.token:
            return False
        response = self._get("/api/admin/check")
        if not response.ok:
            logger.warning(f"Events API rejected the admin token: {response.status_code}")
        return response.ok

    def create_event(self, form: EventForm) -> Dict[str, Any]:
        """
        Validate ``form`` and create the event through the API.

        Returns:
            The API's JSON response (or ``{"raw": text}`` if it is not JSON)

        Raises:
            ValidationError: the form is invalid; nothing is sent
            ProviderError: the API answered with a non-2xx status
            TransientIOError: the API could not be reached
        """
        payload = build_payload(form)
        url = f"{self.base_url}/api/events"
        try:
            response = self.session.post(url, json=payload, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise TransientIOError(f"Events API unreachable: {e}") from e

        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        if not response.ok:
            message = extract_error_message(body, response.reason or "")
            logger.warning(f"Events API rejected '{payload['title']}': {response.status_code} {message}")
            raise ProviderError(f"{response.status_code} {message}", status_code=response.status_code)

        logger.info(f"Events API created '{payload['title']}'")
        return body if isinstance(body, dict) else {"raw": body}
