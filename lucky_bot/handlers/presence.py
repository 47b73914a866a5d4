import logging
from aiogram import Router, Bot
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from aiogram.types import ChatMemberUpdated, Message

from lucky_bot.events import CONVERSATION_UPDATE, Activity
from lucky_bot.handlers.chat import make_sender, message_activity
from lucky_bot.services.dialogue import Reply
from lucky_bot.services.turns import TurnDispatcher

router = Router()


@router.my_chat_member()
async def handle_member_update(
    update: ChatMemberUpdated, turns: TurnDispatcher, bot: Bot
) -> None:
    """Bot was added to or removed from a chat."""
    activity = Activity(
        kind=CONVERSATION_UPDATE,
        text=None,
        user_id=str(update.from_user.id),
        conversation_id=str(update.chat.id),
    )

    async def send(reply: Reply) -> None:
        try:
            await bot.send_message(update.chat.id, reply.text)
        except (TelegramBadRequest, TelegramForbiddenError) as e:
            logging.warning(f"Error sending reply: {e}")

    await turns.handle_turn(activity, send=send)


@router.message()
async def handle_non_text(msg: Message, turns: TurnDispatcher) -> None:
    """Stickers, photos and other messages without text."""
    activity = message_activity(msg, kind=CONVERSATION_UPDATE)
    await turns.handle_turn(activity, send=make_sender(msg))
