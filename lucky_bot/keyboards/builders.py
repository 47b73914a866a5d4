from typing import Union
from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove


def build_choices_keyboard(choices: tuple[str, ...]) -> ReplyKeyboardMarkup:
    """Build a one-row keyboard with a button per suggested answer."""
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=choice) for choice in choices]],
        resize_keyboard=True,
        one_time_keyboard=True,
    )


def build_remove_keyboard() -> ReplyKeyboardRemove:
    """Hide whatever keyboard the previous reply showed."""
    return ReplyKeyboardRemove()


def build_reply_markup(
    choices: tuple[str, ...]
) -> Union[ReplyKeyboardMarkup, ReplyKeyboardRemove]:
    """Pick the keyboard that goes with a reply."""
    if choices:
        return build_choices_keyboard(choices)
    return build_remove_keyboard()
