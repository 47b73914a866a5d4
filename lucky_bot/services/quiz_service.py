import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

QUIZ_PATH = Path(__file__).parent.parent / "data" / "questions.json"


@dataclass(frozen=True)
class Question:
    prompt: str
    choices: dict[str, str]  # letter -> choice text
    correct: str
    right_feedback: str
    wrong_feedback: str

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            prompt=data["question"],
            choices={k.lower(): v for k, v in data["options"].items()},
            correct=data["correct"].lower(),
            right_feedback=data["right_feedback"],
            wrong_feedback=data["wrong_feedback"],
        )


class QuizService:
    """Service for the fixed question bank."""

    _questions: Optional[list[Question]] = None

    @classmethod
    def load_questions(cls) -> list[Question]:
        """Load questions from JSON file."""
        if cls._questions is None:
            with QUIZ_PATH.open(encoding="utf-8") as f:
                data = json.load(f)
            cls._questions = [Question.from_dict(q) for q in data["questions"]]
        return cls._questions

    @classmethod
    def get_question(cls, index: int) -> Optional[Question]:
        """Get a specific question."""
        questions = cls.load_questions()
        if 0 <= index < len(questions):
            return questions[index]
        return None

    @classmethod
    def get_question_count(cls) -> int:
        return len(cls.load_questions())

    @classmethod
    def check_answer(cls, index: int, answer: Optional[str]) -> bool:
        """Check a free-text answer; anything but the right letter is wrong."""
        question = cls.get_question(index)
        if question and answer:
            return answer.lower() == question.correct
        return False

    @classmethod
    def format_question(cls, index: int) -> str:
        """Question prompt followed by all of its choices."""
        question = cls.get_question(index)
        if not question:
            raise IndexError(f"No question with index {index}")
        lines = [question.prompt]
        for letter, text in question.choices.items():
            lines.append(f"{letter.upper()} : {text}")
        return "\n".join(lines)

    @classmethod
    def get_choice_letters(cls, index: int) -> tuple[str, ...]:
        question = cls.get_question(index)
        if not question:
            return ()
        return tuple(letter.upper() for letter in question.choices)
