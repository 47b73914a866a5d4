from lucky_bot.db.models import init_db, get_session
from lucky_bot.db.repository import StateStore

__all__ = ["init_db", "get_session", "StateStore"]
