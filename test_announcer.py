"""
Test suite for announcement formatting and reconciliation.
Verifies that an event is only ever announced by one message.
"""
import asyncio
from datetime import date, datetime, timezone

import pytest

from bot.announcer import MAX_MESSAGE_LENGTH, Announcer, format_announcement
from bot.models import AllDaySpan, AnnouncementMapping, CalendarEvent, TimedSpan
from conftest import ANNOUNCE_CHANNEL, TIMEZONE
from utils.error_handling import TransientIOError


def kickoff(**overrides):
    fields = dict(
        id="evt1",
        title="Kickoff",
        when=TimedSpan(
            start=datetime(2025, 9, 16, 22, 0, tzinfo=timezone.utc),
            end=datetime(2025, 9, 16, 23, 30, tzinfo=timezone.utc),
        ),
        link="https://calendar.google.com/event?eid=evt1",
        location="WALC 1018",
        description="Pizza provided",
    )
    fields.update(overrides)
    return CalendarEvent(**fields)


def make_announcer(store, chat):
    return Announcer(store, chat, ANNOUNCE_CHANNEL, TIMEZONE)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FORMATTING                                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def test_format_announcement_layout():
    content = format_announcement(kickoff(), TIMEZONE)
    assert content == (
        "📅 **Kickoff**\n"
        "🕒 Sep 16, 2025, 6:00 PM\n"
        "📍 WALC 1018\n"
        "\n"
        "Pizza provided\n"
        "\n"
        "<https://calendar.google.com/event?eid=evt1>"
    )


def test_missing_location_reads_tba():
    content = format_announcement(kickoff(location=""), TIMEZONE)
    assert "📍 TBA" in content


def test_all_day_event_shows_date_only():
    event = kickoff(when=AllDaySpan(start=date(2025, 10, 4), end=date(2025, 10, 5)))
    assert "🕒 Oct 4, 2025\n" in format_announcement(event, TIMEZONE)


def test_long_description_is_truncated_to_discord_limit():
    event = kickoff(description="x" * 5000)
    content = format_announcement(event, TIMEZONE)
    assert len(content) == MAX_MESSAGE_LENGTH
    assert content.endswith("…\n\n<https://calendar.google.com/event?eid=evt1>")
    assert content.startswith("📅 **Kickoff**")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ RECONCILIATION                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def test_first_announce_posts_and_records_mapping(store, chat):
    mapping = asyncio.run(make_announcer(store, chat).announce(kickoff()))

    assert len(chat.posts) == 1
    assert chat.posts[0][0] == ANNOUNCE_CHANNEL
    assert store.data["evt1"] == mapping
    assert store.calls.count("set") == 1


def test_announcing_twice_edits_instead_of_reposting(store, chat):
    announcer = make_announcer(store, chat)
    first = asyncio.run(announcer.announce(kickoff()))
    second = asyncio.run(announcer.announce(kickoff(title="Kickoff (moved)")))

    assert len(chat.posts) == 1, "An event must never get a second message"
    assert len(chat.edits) == 1
    assert second == first
    assert store.calls.count("set") == 1
    assert "Kickoff (moved)" in chat.messages[(first.channel_id, first.message_id)]


def test_deleted_message_is_reposted_and_mapping_replaced(store, chat):
    announcer = make_announcer(store, chat)
    first = asyncio.run(announcer.announce(kickoff()))
    del chat.messages[(first.channel_id, first.message_id)]

    second = asyncio.run(announcer.announce(kickoff()))

    assert len(chat.posts) == 2
    assert second.message_id != first.message_id
    assert store.data["evt1"] == second


def test_rejected_post_records_no_mapping(store, chat):
    chat.reject_posts = True
    result = asyncio.run(make_announcer(store, chat).announce(kickoff()))

    assert result is None
    assert "evt1" not in store.data


def test_store_failure_propagates(store, chat):
    store.fail_on.add("get")
    with pytest.raises(TransientIOError):
        asyncio.run(make_announcer(store, chat).announce(kickoff()))
    assert chat.posts == []

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ RETRACTION                                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def test_retract_deletes_message_and_mapping(store, chat):
    announcer = make_announcer(store, chat)
    mapping = asyncio.run(announcer.announce(kickoff()))

    assert asyncio.run(announcer.retract("evt1")) is True
    assert chat.deletes == [(mapping.channel_id, mapping.message_id)]
    assert "evt1" not in store.data


def test_retract_drops_mapping_even_if_message_delete_fails(store, chat):
    store.data["evt1"] = AnnouncementMapping(channel_id="555", message_id="42")
    chat.fail_deletes = True

    assert asyncio.run(make_announcer(store, chat).retract("evt1")) is True
    assert "evt1" not in store.data


def test_retract_without_mapping_does_nothing(store, chat):
    assert asyncio.run(make_announcer(store, chat).retract("evt9")) is False
    assert chat.deletes == []
    assert "delete" not in store.calls
