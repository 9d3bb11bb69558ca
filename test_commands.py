"""
Test suite for the slash command handlers and reply splitting.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

from bot.commands import (
    handle_addevent_command,
    handle_deleteevent_command,
    handle_editevent_command,
    split_message,
)


def make_interaction(reply="ok"):
    interaction = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    dispatcher = MagicMock()
    dispatcher.add_event = AsyncMock(return_value=reply)
    dispatcher.edit_event = AsyncMock(return_value=reply)
    dispatcher.delete_event = AsyncMock(return_value=reply)
    interaction.client.dispatcher = dispatcher
    return interaction, dispatcher


def test_addevent_defers_then_replies():
    interaction, dispatcher = make_interaction("Created: https://x\nID: `evt1`")
    asyncio.run(handle_addevent_command(interaction, "Kickoff", "2025-09-16T18:00", "2025-09-16T19:30", "WALC 1018"))

    interaction.response.defer.assert_awaited_once()
    dispatcher.add_event.assert_awaited_once_with("Kickoff", "2025-09-16T18:00", "2025-09-16T19:30", "WALC 1018", None)
    interaction.followup.send.assert_awaited_once_with("Created: https://x\nID: `evt1`")


def test_editevent_passes_only_given_options():
    interaction, dispatcher = make_interaction("Updated: https://x")
    asyncio.run(handle_editevent_command(interaction, "evt1", location="LWSN B151"))
    dispatcher.edit_event.assert_awaited_once_with("evt1", None, None, None, "LWSN B151", None)


def test_deleteevent_replies_with_dispatcher_text():
    interaction, dispatcher = make_interaction("Deleted evt1")
    asyncio.run(handle_deleteevent_command(interaction, "evt1"))
    dispatcher.delete_event.assert_awaited_once_with("evt1")
    interaction.followup.send.assert_awaited_once_with("Deleted evt1")


def test_split_message_respects_limit():
    text = "\n".join(["line"] * 10)
    chunks = split_message(text, limit=12)
    assert all(len(c) <= 12 for c in chunks)
    assert "\n".join(chunks) == text

    long = "y" * 25
    assert split_message(long, limit=10) == ["y" * 10, "y" * 10, "y" * 5]
    assert split_message("short") == ["short"]
