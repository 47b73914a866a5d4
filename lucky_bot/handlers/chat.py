import logging
from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from aiogram.types import Message

from lucky_bot.events import MESSAGE, Activity
from lucky_bot.keyboards import build_reply_markup
from lucky_bot.services.dialogue import Reply
from lucky_bot.services.turns import Send, TurnDispatcher

router = Router()


def message_activity(msg: Message, kind: str = MESSAGE) -> Activity:
    """Map a Telegram message to an inbound activity."""
    user_id = msg.from_user.id if msg.from_user else msg.chat.id
    return Activity(
        kind=kind,
        text=msg.text,
        user_id=str(user_id),
        conversation_id=str(msg.chat.id),
    )


def make_sender(msg: Message) -> Send:
    """Send replies into the chat the message came from."""

    async def send(reply: Reply) -> None:
        try:
            await msg.answer(reply.text, reply_markup=build_reply_markup(reply.choices))
        except (TelegramBadRequest, TelegramForbiddenError) as e:
            # Skip this reply, the rest of the turn still goes out
            logging.warning(f"Error sending reply: {e}")

    return send


@router.message(F.text)
async def handle_text(msg: Message, turns: TurnDispatcher) -> None:
    """Run one conversation turn for a text message."""
    await turns.handle_turn(message_activity(msg), send=make_sender(msg))
