"""
Shared fixtures and in-memory fakes for the test suite.

The fakes stand in for the Google Calendar service resource, the mapping store
and the Discord message client so dispatcher and announcer tests run offline.
"""
import os
import sys
from unittest.mock import Mock

import pytest
from googleapiclient.errors import HttpError

# Keep test runs from writing into /data/logs
os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs"))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bot.calendar_client import CalendarClient
from bot.dependencies import Dependencies
from bot.models import AnnouncementMapping
from utils.environ import BotConfig
from utils.error_handling import TransientIOError

TIMEZONE = "America/Indiana/Indianapolis"
ANNOUNCE_CHANNEL = "555000111"


def http_error(status: int, reason: str = "error") -> HttpError:
    return HttpError(Mock(status=status, reason=reason), b"")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FAKE GOOGLE CALENDAR SERVICE                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class FakeRequest:
    def __init__(self, fn):
        self.fn = fn

    def execute(self):
        return self.fn()


class FakeCalendarService:
    """Mimics ``service.events()`` with insert/get/update/delete over a dict."""

    def __init__(self):
        self.items = {}
        self.calls = []
        self.fail_insert_with = None
        self._next_id = 1

    def events(self):
        return self

    def insert(self, calendarId, body):
        self.calls.append(("insert", calendarId, body))

        def run():
            if self.fail_insert_with:
                raise http_error(self.fail_insert_with, "Bad Request")
            event_id = f"evt{self._next_id}"
            self._next_id += 1
            stored = dict(body, id=event_id, htmlLink=f"https://calendar.google.com/event?eid={event_id}")
            self.items[event_id] = stored
            return dict(stored)
        return FakeRequest(run)

    def get(self, calendarId, eventId):
        self.calls.append(("get", calendarId, eventId))

        def run():
            if eventId not in self.items:
                raise http_error(404, "Not Found")
            return dict(self.items[eventId])
        return FakeRequest(run)

    def update(self, calendarId, eventId, body):
        self.calls.append(("update", calendarId, eventId, body))

        def run():
            if eventId not in self.items:
                raise http_error(404, "Not Found")
            self.items[eventId] = dict(body)
            return dict(body)
        return FakeRequest(run)

    def delete(self, calendarId, eventId):
        self.calls.append(("delete", calendarId, eventId))

        def run():
            if eventId not in self.items:
                raise http_error(410, "Resource has been deleted")
            del self.items[eventId]
            return ""
        return FakeRequest(run)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FAKE MAPPING STORE & CHAT CLIENT                                          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class FakeMappingStore:
    def __init__(self):
        self.data = {}
        self.calls = []
        self.fail_on = set()

    def _maybe_fail(self, op):
        self.calls.append(op)
        if op in self.fail_on:
            raise TransientIOError(f"store {op} unavailable")

    def get(self, event_id):
        self._maybe_fail("get")
        return self.data.get(event_id)

    def set(self, event_id, mapping):
        self._maybe_fail("set")
        self.data[event_id] = mapping

    def delete(self, event_id):
        self._maybe_fail("delete")
        self.data.pop(event_id, None)


class FakeChatClient:
    """Async stand-in for DiscordChatClient keeping messages in a dict."""

    def __init__(self):
        self.messages = {}
        self.posts = []
        self.edits = []
        self.deletes = []
        self.reject_posts = False
        self.fail_deletes = False
        self._next_id = 100

    async def post_message(self, channel_id, content):
        self.posts.append((channel_id, content))
        if self.reject_posts:
            return None
        message_id = str(self._next_id)
        self._next_id += 1
        self.messages[(channel_id, message_id)] = content
        return AnnouncementMapping(channel_id=channel_id, message_id=message_id)

    async def edit_message(self, channel_id, message_id, content):
        self.edits.append((channel_id, message_id, content))
        if (channel_id, message_id) not in self.messages:
            return False
        self.messages[(channel_id, message_id)] = content
        return True

    async def delete_message(self, channel_id, message_id):
        self.deletes.append((channel_id, message_id))
        if self.fail_deletes:
            raise TransientIOError("discord unavailable")
        self.messages.pop((channel_id, message_id), None)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FIXTURES                                                                  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@pytest.fixture()
def config():
    return BotConfig(
        discord_token="test-token",
        announce_channel_id=ANNOUNCE_CHANNEL,
        calendar_id="club@group.calendar.google.com",
        timezone=TIMEZONE,
        mapping_store_file="unused.json",
    )


@pytest.fixture()
def calendar_service():
    return FakeCalendarService()


@pytest.fixture()
def store():
    return FakeMappingStore()


@pytest.fixture()
def chat():
    return FakeChatClient()


@pytest.fixture()
def deps(config, calendar_service, store, chat):
    return Dependencies(
        calendar_client=CalendarClient(calendar_service, config.calendar_id, config.timezone),
        mapping_store=store,
        chat_client=chat,
        config=config,
    )
