# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                     ANNOUNCEMENT MAPPING STORE MODULE                      ║
# ║   Durable event-id -> (channel, message) mapping. Upstash Redis REST in    ║
# ║        production, a JSON file on disk for local development.              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
mapping_store.py: Persistence for announcement mappings.

Keys are ``cal:<eventId>`` and values are ``{"channelId": ..., "messageId": ...}``
JSON. Every failure raises TransientIOError; callers never skip silently.
"""
import json
import os
import threading
from typing import Any, Dict, Optional

import requests

from bot.models import AnnouncementMapping, mapping_key
from utils.environ import BotConfig
from utils.error_handling import TransientIOError
from utils.logging import logger

REQUEST_TIMEOUT = 10

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ UPSTASH REDIS (REST) BACKEND                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class UpstashMappingStore:
    """Mapping store backed by Upstash Redis' REST command endpoint."""

    def __init__(self, url: str, token: str, session: Optional[requests.Session] = None):
        self.url = url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    # --- _command ---
    # Sends one Redis command as a JSON array and returns its "result".
    # Raises: TransientIOError on network failure, non-2xx status or an "error" payload.
    def _command(self, *args: str) -> Any:
        try:
            response = self.session.post(self.url, json=list(args), timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise TransientIOError(f"Mapping store {args[0]} failed: {e}") from e
        if isinstance(payload, dict) and payload.get("error"):
            raise TransientIOError(f"Mapping store {args[0]} failed: {payload['error']}")
        return payload.get("result") if isinstance(payload, dict) else None

    def get(self, event_id: str) -> Optional[AnnouncementMapping]:
        value = self._command("GET", mapping_key(event_id))
        if value is None:
            return None
        return AnnouncementMapping.from_stored(value)

    def set(self, event_id: str, mapping: AnnouncementMapping) -> None:
        self._command("SET", mapping_key(event_id), mapping.to_json())
        logger.debug(f"Stored mapping for event {event_id} -> {mapping.channel_id}/{mapping.message_id}")

    def delete(self, event_id: str) -> None:
        self._command("DEL", mapping_key(event_id))
        logger.debug(f"Removed mapping for event {event_id}")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ JSON FILE BACKEND                                                         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class FileMappingStore:
    """Mapping store kept in a single JSON file, rewritten on every change."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TransientIOError(f"Could not read mapping file {self.path}: {e}") from e

    # Write to a sibling temp file then replace, so a crash never leaves half a file
    def _save(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = f"{self.path}.tmp"
        try:
            os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=4)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise TransientIOError(f"Could not write mapping file {self.path}: {e}") from e

    def get(self, event_id: str) -> Optional[AnnouncementMapping]:
        with self._lock:
            value = self._load().get(mapping_key(event_id))
        return AnnouncementMapping.from_stored(value) if value is not None else None

    def set(self, event_id: str, mapping: AnnouncementMapping) -> None:
        with self._lock:
            data = self._load()
            data[mapping_key(event_id)] = {"channelId": mapping.channel_id, "messageId": mapping.message_id}
            self._save(data)
        logger.debug(f"Stored mapping for event {event_id} in {self.path}")

    def delete(self, event_id: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(mapping_key(event_id), None) is not None:
                self._save(data)

# --- create_mapping_store ---
# Chooses the backend from configuration: MAPPING_STORE_FILE wins when set,
# otherwise Upstash credentials are used.
def create_mapping_store(config: BotConfig):
    if config.mapping_store_file:
        logger.info(f"Using file mapping store at {config.mapping_store_file}")
        return FileMappingStore(config.mapping_store_file)
    logger.info("Using Upstash Redis mapping store")
    return UpstashMappingStore(config.upstash_url, config.upstash_token)
