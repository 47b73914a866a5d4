"""Tests for the Telegram handlers and keyboards."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import ReplyKeyboardMarkup, ReplyKeyboardRemove

from lucky_bot.db.repository import CONVERSATION, PROFILE
from lucky_bot.events import CONVERSATION_UPDATE, MESSAGE
from lucky_bot.handlers.chat import handle_text, message_activity
from lucky_bot.handlers.presence import handle_member_update, handle_non_text
from lucky_bot.keyboards import build_reply_markup
from lucky_bot.services import dialogue
from lucky_bot.states import ConversationStage, UserProfile


def make_message(text, chat_id=42, user_id=7):
    msg = MagicMock()
    msg.text = text
    msg.chat.id = chat_id
    msg.from_user.id = user_id
    msg.answer = AsyncMock()
    return msg


def sent_texts(msg):
    return [call.args[0] for call in msg.answer.await_args_list]


# ── keyboards ──────────────────────────────────────────────


def test_no_choices_removes_keyboard():
    assert isinstance(build_reply_markup(()), ReplyKeyboardRemove)


def test_choices_keyboard():
    markup = build_reply_markup(("A", "B", "C", "D"))
    assert isinstance(markup, ReplyKeyboardMarkup)
    assert [b.text for b in markup.keyboard[0]] == ["A", "B", "C", "D"]
    assert markup.one_time_keyboard


# ── activities ─────────────────────────────────────────────


def test_message_activity_ids_are_strings():
    activity = message_activity(make_message("hi"))
    assert activity.kind == MESSAGE
    assert activity.text == "hi"
    assert activity.user_id == "7"
    assert activity.conversation_id == "42"


def test_message_activity_without_sender_uses_chat():
    msg = make_message("hi")
    msg.from_user = None
    assert message_activity(msg).user_id == "42"


# ── handlers ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_text_message_gets_greeting(turns):
    msg = make_message("hello")
    await handle_text(msg, turns)

    assert sent_texts(msg) == [dialogue.GREETING]
    markup = msg.answer.await_args.kwargs["reply_markup"]
    assert isinstance(markup, ReplyKeyboardRemove)


@pytest.mark.asyncio
async def test_offer_comes_with_yes_no_keyboard(turns):
    for text in ["hello", "Alice"]:
        await handle_text(make_message(text), turns)

    msg = make_message("ok")
    await handle_text(msg, turns)

    markup = msg.answer.await_args.kwargs["reply_markup"]
    assert isinstance(markup, ReplyKeyboardMarkup)
    assert [b.text for b in markup.keyboard[0]] == ["Yes", "No"]


@pytest.mark.asyncio
async def test_answer_turn_sends_all_replies(turns):
    for text in ["hello", "Alice", "ok", "Yes"]:
        await handle_text(make_message(text), turns)

    msg = make_message("B")
    await handle_text(msg, turns)

    texts = sent_texts(msg)
    assert texts[:3] == [
        dialogue.FEEDBACK_LEAD,
        "right answer!!!",
        "Your current number of points is 1",
    ]
    assert "second question" in texts[3]


@pytest.mark.asyncio
async def test_send_errors_do_not_stop_the_turn(turns, store):
    msg = make_message("hello")
    msg.answer.side_effect = TelegramBadRequest(
        method=MagicMock(), message="chat not found"
    )

    await handle_text(msg, turns)

    msg.answer.assert_awaited_once()
    conversation = store.get_or_create("42", CONVERSATION, "42", ConversationStage)
    assert conversation.said_hello


@pytest.mark.asyncio
async def test_sticker_is_a_presence_update(turns, store):
    for text in ["hello", "Alice"]:
        await handle_text(make_message(text), turns)
    before = store.get_or_create("42", CONVERSATION, "42", ConversationStage)

    msg = make_message(None)
    await handle_non_text(msg, turns)

    assert sent_texts(msg) == ["We hope you are still here, Alice"]
    assert store.get_or_create("42", CONVERSATION, "42", ConversationStage) == before


@pytest.mark.asyncio
async def test_member_update_for_stranger_is_silent(turns, store):
    update = MagicMock()
    update.chat.id = 42
    update.from_user.id = 7
    bot = MagicMock()
    bot.send_message = AsyncMock()

    await handle_member_update(update, turns, bot)

    bot.send_message.assert_not_awaited()
    assert store.get_or_create("42", PROFILE, "7", UserProfile).name is None


@pytest.mark.asyncio
async def test_member_update_for_known_user(turns):
    for text in ["hello", "Alice"]:
        await handle_text(make_message(text), turns)
    update = MagicMock()
    update.chat.id = 42
    update.from_user.id = 7
    bot = MagicMock()
    bot.send_message = AsyncMock()

    await handle_member_update(update, turns, bot)

    bot.send_message.assert_awaited_once_with(42, "We hope you are still here, Alice")


def test_conversation_update_kind():
    activity = message_activity(make_message(None), kind=CONVERSATION_UPDATE)
    assert activity.kind == CONVERSATION_UPDATE
