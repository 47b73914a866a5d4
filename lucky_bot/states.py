from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

QUESTION_COUNT = 5


class Stage(str, Enum):
    """Stages of the conversation flow, in the order a user passes them."""

    GREETING = "greeting"  # Bot has not introduced itself yet
    NAME_CAPTURE = "name_capture"  # Waiting for the user's name
    GAME_OFFER = "game_offer"  # Name is known, game not offered yet
    OFFER_ANSWER = "offer_answer"  # Waiting for yes/no to the game offer
    QUIZ = "quiz"  # User is answering trivia questions
    FINISHED = "finished"  # Quiz scored, only chit-chat left

    @classmethod
    def from_flags(cls, conversation: "ConversationStage") -> "Stage":
        """Derive the stage of a record stored without an explicit stage."""
        if not conversation.said_hello:
            return cls.GREETING
        if not conversation.greeted_name:
            return cls.NAME_CAPTURE
        if not conversation.offer_game:
            return cls.GAME_OFFER
        if conversation.play_a_game:
            return cls.OFFER_ANSWER
        return cls.QUIZ


@dataclass
class ConversationStage:
    """Per-conversation record of the onboarding flags."""

    stage: Stage = Stage.GREETING
    turn_count: int = 0
    said_hello: bool = False
    greeted_name: bool = False
    offer_game: bool = False
    play_a_game: bool = False


@dataclass
class UserProfile:
    name: Optional[str] = None


@dataclass
class TriviaProgress:
    """Per-user quiz score and the questions already scored."""

    points: int = 0
    answered: list[bool] = field(default_factory=lambda: [False] * QUESTION_COUNT)

    def next_question(self) -> Optional[int]:
        """Index of the first unanswered question, None when all are done."""
        for idx, done in enumerate(self.answered):
            if not done:
                return idx
        return None

    def record(self, idx: int, correct: bool) -> None:
        """Mark question `idx` as answered and add a point if correct."""
        if self.answered[idx]:
            raise ValueError(f"Question {idx} is already answered")
        self.answered[idx] = True
        self.points += int(correct)


@dataclass
class TurnSnapshot:
    """Everything the dialogue needs to decide one turn."""

    conversation: ConversationStage = field(default_factory=ConversationStage)
    profile: UserProfile = field(default_factory=UserProfile)
    progress: TriviaProgress = field(default_factory=TriviaProgress)

    def current_stage(self) -> Stage:
        stage = self.conversation.stage
        if stage is Stage.QUIZ and self.progress.next_question() is None:
            return Stage.FINISHED
        return stage
