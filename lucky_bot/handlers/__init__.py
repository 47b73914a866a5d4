from aiogram import Router

from lucky_bot.handlers.chat import router as chat_router
from lucky_bot.handlers.presence import router as presence_router


def setup_routers() -> Router:
    """Setup and return the main router with all sub-routers."""
    router = Router()
    router.include_router(chat_router)
    router.include_router(presence_router)
    return router


__all__ = ["setup_routers"]
