from lucky_bot.keyboards.builders import (
    build_choices_keyboard,
    build_remove_keyboard,
    build_reply_markup,
)

__all__ = [
    "build_choices_keyboard",
    "build_remove_keyboard",
    "build_reply_markup",
]
