from dataclasses import dataclass
from typing import Optional, Union

MESSAGE = "message"
CONVERSATION_UPDATE = "conversationUpdate"


@dataclass(frozen=True)
class Activity:
    """Inbound activity as the transport hands it over."""

    kind: str
    text: Optional[str]
    user_id: str
    conversation_id: str


@dataclass(frozen=True)
class MessageReceived:
    text: str


@dataclass(frozen=True)
class AnswerSubmitted:
    index: int  # Question being answered
    text: str


@dataclass(frozen=True)
class PresenceChecked:
    """Any non-message activity: the user is around but said nothing."""


Event = Union[MessageReceived, AnswerSubmitted, PresenceChecked]
