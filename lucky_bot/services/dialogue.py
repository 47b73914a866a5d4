"""Turn decisions for the lucky trivia conversation.

Each stage has one transition function. A transition gets a private copy of
the turn snapshot and the event for the turn, mutates the copy and returns the
replies to send. Exactly one transition runs per turn.
"""
import copy
from dataclasses import dataclass, field
from typing import Callable

from lucky_bot.events import (
    MESSAGE,
    Activity,
    AnswerSubmitted,
    Event,
    MessageReceived,
    PresenceChecked,
)
from lucky_bot.services.quiz_service import QuizService
from lucky_bot.states import Stage, TurnSnapshot

GREETING = "Hi, My Name is Bot, What is your name?"
NAME_ACK = "Hi, {name}, it's nice to meet you!"
GAME_OFFER = "{name}, do you want to play a lucky .NET Developer game?"
GAME_ACCEPTED = "That's Great!\nSo the first question is\n{question}"
GAME_DECLINED = "Unfortunately there is no more functional! Goodbye!"
FEEDBACK_LEAD = "And this is "
POINTS = "Your current number of points is {points}"
NEXT_QUESTION = "And now it is time for the {ordinal} question\n{question}"
FALLBACK = "{name}, do you want to play a lucky trivial game?"
STILL_HERE = "We hope you are still here, {name}"

VERDICT_HARSH = "Unfortunately, you are not a programmer yet"
VERDICT_GOOD = "Man, you are in good relationship with C#!"
VERDICT_PERFECT = "You are you, object?"

ORDINALS = ["first", "second", "third", "fourth", "fifth"]
YES_NO = ("Yes", "No")

# Seconds to wait before a reply, scaled by the delivery pace
FEEDBACK_DELAY = 2.0
QUESTION_DELAY = 1.0


@dataclass(frozen=True)
class Reply:
    """One outbound message."""

    text: str
    delay: float = 0.0  # Pause before sending
    choices: tuple[str, ...] = ()  # Suggested answers for keyboards


@dataclass
class TurnResult:
    replies: list[Reply] = field(default_factory=list)
    snapshot: TurnSnapshot = field(default_factory=TurnSnapshot)


def build_event(snapshot: TurnSnapshot, activity: Activity) -> Event:
    """Turn an inbound activity into the event the current stage expects."""
    if activity.kind != MESSAGE:
        return PresenceChecked()
    text = activity.text or ""
    if snapshot.current_stage() is Stage.QUIZ:
        return AnswerSubmitted(snapshot.progress.next_question(), text)
    return MessageReceived(text)


def verdict(points: int) -> str:
    """Closing message for the final score."""
    if points >= QuizService.get_question_count():
        return VERDICT_PERFECT
    if points >= 3:
        return VERDICT_GOOD
    return VERDICT_HARSH


def _question_reply(index: int, text: str, delay: float = 0.0) -> Reply:
    return Reply(text, delay=delay, choices=QuizService.get_choice_letters(index))


def _greet(state: TurnSnapshot, event: Event) -> list[Reply]:
    state.conversation.said_hello = True
    state.conversation.stage = Stage.NAME_CAPTURE
    return [Reply(GREETING)]


def _capture_name(state: TurnSnapshot, event: Event) -> list[Reply]:
    state.profile.name = event.text
    state.conversation.greeted_name = True
    state.conversation.stage = Stage.GAME_OFFER
    return [Reply(NAME_ACK.format(name=event.text))]


def _offer_game(state: TurnSnapshot, event: Event) -> list[Reply]:
    state.conversation.offer_game = True
    state.conversation.play_a_game = True
    state.conversation.stage = Stage.OFFER_ANSWER
    return [Reply(GAME_OFFER.format(name=state.profile.name), choices=YES_NO)]


def _answer_offer(state: TurnSnapshot, event: Event) -> list[Reply]:
    # Declining still moves on: the next message is scored as an answer
    state.conversation.play_a_game = False
    state.conversation.stage = Stage.QUIZ
    if event.text.lower() == "yes":
        text = GAME_ACCEPTED.format(question=QuizService.format_question(0))
        return [_question_reply(0, text)]
    return [Reply(GAME_DECLINED)]


def _answer_question(state: TurnSnapshot, event: Event) -> list[Reply]:
    # A stale answer index is scored against the question being asked
    index = state.progress.next_question()

    question = QuizService.get_question(index)
    correct = QuizService.check_answer(index, event.text)
    state.progress.record(index, correct)

    feedback = question.right_feedback if correct else question.wrong_feedback
    replies = [
        Reply(FEEDBACK_LEAD),
        Reply(feedback, delay=FEEDBACK_DELAY),
        Reply(POINTS.format(points=state.progress.points)),
    ]

    next_index = index + 1
    if next_index < QuizService.get_question_count():
        text = NEXT_QUESTION.format(
            ordinal=ORDINALS[next_index],
            question=QuizService.format_question(next_index),
        )
        replies.append(_question_reply(next_index, text, delay=QUESTION_DELAY))
    else:
        state.conversation.stage = Stage.FINISHED
        replies.append(Reply(verdict(state.progress.points), delay=QUESTION_DELAY))
    return replies


def _chit_chat(state: TurnSnapshot, event: Event) -> list[Reply]:
    state.conversation.stage = Stage.FINISHED
    return [Reply(FALLBACK.format(name=state.profile.name))]


TRANSITIONS: dict[Stage, Callable[[TurnSnapshot, Event], list[Reply]]] = {
    Stage.GREETING: _greet,
    Stage.NAME_CAPTURE: _capture_name,
    Stage.GAME_OFFER: _offer_game,
    Stage.OFFER_ANSWER: _answer_offer,
    Stage.QUIZ: _answer_question,
    Stage.FINISHED: _chit_chat,
}


def decide(snapshot: TurnSnapshot, event: Event) -> TurnResult:
    """Decide the replies and the next state for one turn.

    The given snapshot is never modified, so the same snapshot and event
    always produce the same result.
    """
    state = copy.deepcopy(snapshot)

    if isinstance(event, PresenceChecked):
        replies = []
        if state.profile.name is not None:
            replies.append(Reply(STILL_HERE.format(name=state.profile.name)))
        return TurnResult(replies, state)

    state.conversation.turn_count += 1
    transition = TRANSITIONS[state.current_stage()]
    return TurnResult(transition(state, event), state)
