from __future__ import annotations

import itertools

import pytest

from fixtures import make_quiz, multi, single
from quizforge.quiz.evaluator import (
    OptionStatus,
    classify_option,
    evaluate,
    format_score,
    grade,
    question_outcomes,
    score,
)


def test_evaluate_single_select() -> None:
    question = single("q", 1, ["a", "b", "c"])

    assert evaluate(question, frozenset({1})) is True
    assert evaluate(question, frozenset({0})) is False
    assert evaluate(question, frozenset()) is False


def test_evaluate_multi_select_requires_exact_set() -> None:
    question = multi("q", (0, 2), ["a", "b", "c", "d"])

    assert evaluate(question, frozenset({0, 2})) is True
    assert evaluate(question, frozenset({0})) is False
    assert evaluate(question, frozenset({0, 1, 2})) is False
    assert evaluate(question, frozenset({1, 3})) is False


def test_evaluate_matches_exact_set_for_every_subset() -> None:
    question = multi("q", (0, 1), ["a", "b", "c"])
    indices = range(len(question.options))
    for size in range(len(question.options) + 1):
        for picks in itertools.combinations(indices, size):
            selected = frozenset(picks)
            assert evaluate(question, selected) is (
                selected == question.correct_indices
            )


def test_score_bounds_and_endpoints(quiz) -> None:
    assert score(quiz, {}) == 0
    perfect = {
        index: question.correct_indices
        for index, question in enumerate(quiz.questions)
    }
    assert score(quiz, perfect) == 100


def test_score_counts_exact_questions(quiz) -> None:
    answers = {0: frozenset({1}), 1: frozenset({0}), 2: frozenset({0})}

    assert question_outcomes(quiz, answers) == [True, False, True, False]
    assert score(quiz, answers) == 50


def test_grade_freezes_state(quiz) -> None:
    result = grade(quiz, {0: {1}, 3: [0, 1]})

    assert result.answer_state == {0: frozenset({1}), 3: frozenset({0, 1})}
    assert result.score == 50


@pytest.mark.parametrize(
    "answers, message",
    [
        ({4: {0}}, "No question 4"),
        ({-1: {0}}, "No question -1"),
        ({0: {3}}, "Question 0 has no option 3"),
        ({1: {0, -2}}, "Question 1 has no option -2"),
    ],
)
def test_grade_rejects_out_of_range_indices(quiz, answers, message) -> None:
    with pytest.raises(ValueError, match=message):
        grade(quiz, answers)


def test_score_thirds() -> None:
    quiz = make_quiz(
        single("a", 0, ["x", "y"]),
        single("b", 0, ["x", "y"]),
        single("c", 0, ["x", "y"]),
    )

    value = score(quiz, {0: frozenset({0})})

    assert value == pytest.approx(100 / 3)
    assert format_score(value) == "33%"
    assert format_score(score(quiz, {0: {0}, 1: {0}})) == "67%"


@pytest.mark.parametrize(
    "value, expected",
    [(0, "0%"), (12.5, "13%"), (49.4, "49%"), (87.5, "88%"), (100, "100%")],
)
def test_format_score_rounds_half_up(value: float, expected: str) -> None:
    assert format_score(value) == expected


@pytest.mark.parametrize(
    "is_correct, selected, status, classes, marker",
    [
        (True, True, OptionStatus.CORRECT_SELECTED, ("correct", "user-choice"), "✅"),
        (True, False, OptionStatus.CORRECT_MISSED, ("correct",), "✅"),
        (False, True, OptionStatus.INCORRECT_SELECTED, ("incorrect", "user-choice"), "❌"),
        (False, False, OptionStatus.NEUTRAL, (), ""),
    ],
)
def test_classify_option(is_correct, selected, status, classes, marker) -> None:
    mark = classify_option(is_correct, selected)

    assert mark.status is status
    assert mark.css_classes == classes
    assert mark.marker == marker


def test_three_of_four_correct_scores_75(quiz) -> None:
    answers = {0: {1}, 1: {0, 2}, 2: {0}, 3: {2}}

    assert score(quiz, answers) == 75.0


def test_missing_index_counts_as_incorrect(quiz) -> None:
    assert question_outcomes(quiz, {2: frozenset({0})}) == [
        False,
        False,
        True,
        False,
    ]
