from typing import Any, Callable, Optional
from sqlalchemy.orm import Session

from lucky_bot.db.models import Conversation, Profile, Progress, get_session
from lucky_bot.states import ConversationStage, Stage, TriviaProgress, UserProfile

CONVERSATION = "conversation"
PROFILE = "profile"
PROGRESS = "progress"


class ConversationRepository:
    """Repository for per-conversation stage records."""

    @staticmethod
    def load(session: Session, conversation_id: str) -> Optional[ConversationStage]:
        row = session.get(Conversation, conversation_id)
        if not row:
            return None
        conversation = ConversationStage(
            turn_count=row.turn_count or 0,
            said_hello=bool(row.said_hello),
            greeted_name=bool(row.greeted_name),
            offer_game=bool(row.offer_game),
            play_a_game=bool(row.play_a_game),
        )
        if row.stage:
            conversation.stage = Stage(row.stage)
        else:
            conversation.stage = Stage.from_flags(conversation)
        return conversation

    @staticmethod
    def save(session: Session, conversation_id: str, value: ConversationStage) -> None:
        row = session.get(Conversation, conversation_id)
        if not row:
            row = Conversation(conversation_id=conversation_id)
            session.add(row)
        row.stage = value.stage.value
        row.turn_count = value.turn_count
        row.said_hello = value.said_hello
        row.greeted_name = value.greeted_name
        row.offer_game = value.offer_game
        row.play_a_game = value.play_a_game


class ProfileRepository:
    """Repository for user profiles."""

    @staticmethod
    def load(session: Session, user_id: str) -> Optional[UserProfile]:
        row = session.get(Profile, user_id)
        if not row:
            return None
        return UserProfile(name=row.name)

    @staticmethod
    def save(session: Session, user_id: str, value: UserProfile) -> None:
        row = session.get(Profile, user_id)
        if not row:
            row = Profile(user_id=user_id)
            session.add(row)
        row.name = value.name


class ProgressRepository:
    """Repository for per-user trivia progress."""

    @staticmethod
    def load(session: Session, user_id: str) -> Optional[TriviaProgress]:
        row = session.get(Progress, user_id)
        if not row:
            return None
        return TriviaProgress(points=row.points or 0, answered=row.get_answered())

    @staticmethod
    def save(session: Session, user_id: str, value: TriviaProgress) -> None:
        row = session.get(Progress, user_id)
        if not row:
            row = Progress(user_id=user_id)
            session.add(row)
        row.points = value.points
        row.set_answered(list(value.answered))


REPOSITORIES = {
    CONVERSATION: ConversationRepository,
    PROFILE: ProfileRepository,
    PROGRESS: ProgressRepository,
}


class StateStore:
    """Keyed, typed state accessors committed once per conversation turn.

    Values passed to `set` stay pending until `commit` is called for the
    same conversation, so concurrent turns of different conversations never
    flush each other's writes.
    """

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory
        self._pending: dict[str, dict[tuple[str, str], Any]] = {}

    def get_or_create(
        self, conversation_id: str, scope: str, key: str, factory: Callable[[], Any]
    ) -> Any:
        """Get the stored value for (scope, key) or a fresh one from factory."""
        pending = self._pending.get(conversation_id, {})
        if (scope, key) in pending:
            return pending[(scope, key)]
        with self._session_factory() as session:
            value = REPOSITORIES[scope].load(session, key)
        return value if value is not None else factory()

    def set(self, conversation_id: str, scope: str, key: str, value: Any) -> None:
        if scope not in REPOSITORIES:
            raise KeyError(f"Unknown state scope: {scope}")
        self._pending.setdefault(conversation_id, {})[(scope, key)] = value

    def commit(self, conversation_id: str) -> None:
        """Write every value set during the turn. Errors propagate."""
        pending = self._pending.pop(conversation_id, {})
        if not pending:
            return
        with self._session_factory() as session:
            for (scope, key), value in pending.items():
                REPOSITORIES[scope].save(session, key, value)
            session.commit()
