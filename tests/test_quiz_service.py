"""Tests for the question bank."""

import pytest

from lucky_bot.services.quiz_service import Question, QuizService


def test_bank_has_five_questions_in_order():
    assert QuizService.get_question_count() == 5
    first = QuizService.get_question(0)
    last = QuizService.get_question(4)
    assert "signed byte" in first.prompt
    assert "Boolean" in last.prompt


def test_correct_letters():
    letters = [QuizService.get_question(i).correct for i in range(5)]
    assert letters == ["b", "c", "b", "d", "a"]


def test_out_of_range_question():
    assert QuizService.get_question(5) is None
    assert QuizService.get_question(-1) is None


def test_check_answer_is_case_insensitive():
    assert QuizService.check_answer(0, "b")
    assert QuizService.check_answer(0, "B")
    assert not QuizService.check_answer(0, "a")


def test_check_answer_rejects_free_text():
    assert not QuizService.check_answer(0, "")
    assert not QuizService.check_answer(0, None)
    assert not QuizService.check_answer(0, "b is my answer")
    assert not QuizService.check_answer(9, "b")


def test_wrong_feedback_names_the_correct_choice():
    for i in range(5):
        question = QuizService.get_question(i)
        assert question.choices[question.correct] in question.wrong_feedback


def test_format_question_lists_all_choices():
    text = QuizService.format_question(0)
    lines = text.splitlines()
    assert lines[0] == QuizService.get_question(0).prompt
    assert lines[1:] == [
        "A : ToInt64",
        "B : ToSbyte",
        "C : ToSingle",
        "D : ToInt32",
    ]


def test_format_missing_question_raises():
    with pytest.raises(IndexError):
        QuizService.format_question(5)


def test_choice_letters():
    assert QuizService.get_choice_letters(1) == ("A", "B", "C", "D")
    assert QuizService.get_choice_letters(7) == ()


def test_question_from_dict_lowercases_letters():
    question = Question.from_dict(
        {
            "question": "Q?",
            "options": {"A": "one", "B": "two"},
            "correct": "B",
            "right_feedback": "yes",
            "wrong_feedback": "no, two",
        }
    )
    assert question.correct == "b"
    assert question.choices == {"a": "one", "b": "two"}
