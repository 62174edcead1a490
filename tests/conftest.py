from __future__ import annotations

import pytest

from quiz_core.types import (
    KNOWLEDGE,
    PERSONALITY,
    PUZZLE,
    Answer,
    Question,
    Quiz,
    Result,
    Score,
)


def build_personality_quiz(
    answer_scores: dict[int, dict[int, list[tuple[int, int]]]],
    result_ids: list[int],
    *,
    quiz_id: int = 1,
) -> Quiz:
    """Build a personality quiz from {question_id: {answer_id: [(result_id, value), ...]}}."""

    questions = [
        Question(
            id=qid,
            title=f"Q{qid}",
            quiz_id=quiz_id,
            answers=[
                Answer(
                    id=aid,
                    title=f"A{aid}",
                    question_id=qid,
                    scores=[Score(answer_id=aid, result_id=rid, score_value=val) for rid, val in pairs],
                )
                for aid, pairs in answers.items()
            ],
        )
        for qid, answers in answer_scores.items()
    ]
    results = [Result(id=rid, title=f"R{rid}", quiz_id=quiz_id) for rid in result_ids]
    return Quiz(id=quiz_id, quiz_type=PERSONALITY, questions=questions, results=results)


def build_knowledge_quiz(
    answer_points: dict[int, dict[int, int]],
    bands: list[tuple[int, int]],
    *,
    quiz_id: int = 2,
) -> Quiz:
    """Build a knowledge quiz from {question_id: {answer_id: points}} and result bands.

    Result ids are 1000 + position in ``bands``.
    """

    questions = [
        Question(
            id=qid,
            title=f"Q{qid}",
            quiz_id=quiz_id,
            answers=[Answer(id=aid, title=f"A{aid}", points=pts, question_id=qid) for aid, pts in answers.items()],
        )
        for qid, answers in answer_points.items()
    ]
    results = [
        Result(id=1000 + idx, title=f"Band {lo}-{hi}", quiz_id=quiz_id, point_from=lo, point_to=hi)
        for idx, (lo, hi) in enumerate(bands)
    ]
    return Quiz(id=quiz_id, quiz_type=KNOWLEDGE, questions=questions, results=results)


def build_puzzle_quiz(
    answer_points: dict[int, int] | None = None,
    bands: list[tuple[int, int]] | None = None,
    *,
    quiz_id: int = 3,
    question_id: int = 7,
) -> Quiz:
    """Single-question puzzle. Result ids: 11 for the first band, 12 for the second, ..."""

    points = answer_points if answer_points is not None else {1: 1, 2: 0}
    question = Question(
        id=question_id,
        title="Riddle",
        quiz_id=quiz_id,
        answers=[Answer(id=aid, title=f"A{aid}", points=pts, question_id=question_id) for aid, pts in points.items()],
    )
    results = [
        Result(id=11 + idx, title=f"Band {lo}-{hi}", quiz_id=quiz_id, point_from=lo, point_to=hi)
        for idx, (lo, hi) in enumerate(bands if bands is not None else [(1, 1), (0, 0)])
    ]
    return Quiz(id=quiz_id, quiz_type=PUZZLE, questions=[question], results=results)


@pytest.fixture
def personality_quiz() -> Quiz:
    return build_personality_quiz(
        {
            10: {100: [(1, 3)], 101: [(2, 2), (3, 1)]},
            20: {200: [(2, 2)], 201: [(3, 4)], 202: [(1, 1)]},
        },
        [1, 2, 3],
    )


@pytest.fixture
def knowledge_quiz() -> Quiz:
    return build_knowledge_quiz(
        {
            10: {100: 1, 101: 0},
            20: {200: 0, 201: 1},
            30: {300: 1, 301: 0, 302: 0},
        },
        [(0, 1), (2, 2), (3, 3)],
    )


@pytest.fixture
def puzzle_quiz() -> Quiz:
    return build_puzzle_quiz()
