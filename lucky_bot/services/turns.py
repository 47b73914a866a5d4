import asyncio
import logging
from typing import Awaitable, Callable, Optional

from lucky_bot.db.repository import CONVERSATION, PROFILE, PROGRESS, StateStore
from lucky_bot.events import MESSAGE, Activity
from lucky_bot.services.dialogue import Reply, build_event, decide
from lucky_bot.states import (
    ConversationStage,
    TriviaProgress,
    TurnSnapshot,
    UserProfile,
)

Send = Callable[[Reply], Awaitable[None]]


async def deliver(
    replies: list[Reply],
    send: Send,
    cancel: Optional[asyncio.Event] = None,
    pace: float = 1.0,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Send replies in order, waiting each reply's delay first.

    Stops before the next send once `cancel` is set. Returns how many
    replies were sent.
    """
    sent = 0
    for reply in replies:
        if reply.delay and pace > 0:
            await asyncio.sleep(reply.delay * pace)
        if cancel is not None and cancel.is_set():
            (logger or logging.getLogger(__name__)).info(
                f"Delivery cancelled after {sent} of {len(replies)} replies"
            )
            break
        await send(reply)
        sent += 1
    return sent


class TurnDispatcher:
    """Runs one conversation turn: load state, decide, send, commit."""

    def __init__(self, store: StateStore, logger: logging.Logger, pace: float = 1.0):
        if store is None:
            raise ValueError("A state store is required")
        if logger is None:
            raise ValueError("A logger is required")
        self._store = store
        self._logger = logger
        self._pace = pace
        self._locks: dict[str, asyncio.Lock] = {}

    def _get_lock(self, conversation_id: str) -> asyncio.Lock:
        if conversation_id not in self._locks:
            self._locks[conversation_id] = asyncio.Lock()
        return self._locks[conversation_id]

    def load(self, activity: Activity) -> TurnSnapshot:
        """Read the three records a turn works on."""
        cid = activity.conversation_id
        return TurnSnapshot(
            conversation=self._store.get_or_create(
                cid, CONVERSATION, cid, ConversationStage
            ),
            profile=self._store.get_or_create(
                cid, PROFILE, activity.user_id, UserProfile
            ),
            progress=self._store.get_or_create(
                cid, PROGRESS, activity.user_id, TriviaProgress
            ),
        )

    def save(self, activity: Activity, snapshot: TurnSnapshot) -> None:
        cid = activity.conversation_id
        self._store.set(cid, CONVERSATION, cid, snapshot.conversation)
        self._store.set(cid, PROFILE, activity.user_id, snapshot.profile)
        self._store.set(cid, PROGRESS, activity.user_id, snapshot.progress)

    async def handle_turn(
        self,
        activity: Activity,
        send: Optional[Send] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> list[Reply]:
        """Process one inbound activity and return the replies in send order.

        Replies are delivered through `send` when given. State is committed
        at the end of every message turn; other activity kinds never change
        state. Turns of one conversation run one at a time.
        """
        async with self._get_lock(activity.conversation_id):
            return await self._run_turn(activity, send, cancel)

    async def _run_turn(
        self,
        activity: Activity,
        send: Optional[Send],
        cancel: Optional[asyncio.Event],
    ) -> list[Reply]:
        snapshot = self.load(activity)
        before = snapshot.current_stage()
        result = decide(snapshot, build_event(snapshot, activity))

        self._logger.debug(
            f"Turn in {activity.conversation_id}: kind={activity.kind} "
            f"stage={before.value} replies={len(result.replies)}"
        )

        if send is not None:
            await deliver(
                result.replies, send, cancel, self._pace, logger=self._logger
            )

        if activity.kind == MESSAGE:
            after = result.snapshot.current_stage()
            if after is not before:
                self._logger.info(
                    f"Conversation {activity.conversation_id}: "
                    f"{before.value} -> {after.value}"
                )
            self.save(activity, result.snapshot)
            self._store.commit(activity.conversation_id)

        return result.replies
