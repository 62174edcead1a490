"""Quiz scoring engine.

Turns a fully loaded quiz plus the user's selections (question id -> answer id)
into the winning result, the score and a calculation trace. Pure: nothing here
touches storage or mutates the quiz.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Tuple

from . import config
from .errors import InvalidPuzzleConfiguration, NoMatchingResult, UnsupportedQuizType
from .types import (
    KNOWLEDGE,
    PERSONALITY,
    PUZZLE,
    Answer,
    Calculation,
    Contribution,
    KnowledgeScoring,
    PersonalityScoring,
    PuzzleScoring,
    Question,
    QuestionScore,
    Quiz,
    ResultScore,
    ScoringResult,
    WinningResult,
)

log = logging.getLogger(__name__)

Selections = Mapping[int, int]
AnswerIndex = Dict[int, Tuple[Question, Answer]]


def _trace(msg: str, *args: object) -> None:
    if config.DEBUG_TRACE:
        log.info("trace " + msg, *args)


def index_answers(quiz: Quiz) -> AnswerIndex:
    """Map every answer id in the quiz to (owning question, answer)."""

    index: AnswerIndex = {}
    for question in quiz.questions:
        for answer in question.answers:
            index[answer.id] = (question, answer)
    return index


def _lookup(index: AnswerIndex, quiz: Quiz, question_id: int, answer_id: int) -> Answer | None:
    hit = index.get(answer_id)
    if hit is None:
        log.warning("quiz %s: answer %s selected for question %s is not part of the quiz",
                    quiz.id, answer_id, question_id)
        return None
    return hit[1]


def max_personality_score(quiz: Quiz) -> int:
    """Sum over questions of the highest single score value on any of its answers.

    A theoretical ceiling; no real answer combination has to reach it.
    """

    total = 0
    for question in quiz.questions:
        values = [s.score_value for a in question.answers for s in a.scores]
        total += max(values, default=0)
    return total


def _score_personality(quiz: Quiz, selected_answers: Selections) -> ScoringResult:
    if not quiz.results:
        raise NoMatchingResult(None, f"Quiz {quiz.id} has no results to choose from")

    index = index_answers(quiz)
    totals: Dict[int, int] = {r.id: 0 for r in quiz.results}
    contributions: Dict[int, List[Contribution]] = {r.id: [] for r in quiz.results}

    for question_id, answer_id in selected_answers.items():
        answer = _lookup(index, quiz, question_id, answer_id)
        if answer is None:
            continue
        for score in answer.scores:
            if score.result_id not in totals:
                log.warning("quiz %s: answer %s scores unknown result %s; ignored",
                            quiz.id, answer.id, score.result_id)
                continue
            # no de-duplication: repeated (answer, result) records all count
            totals[score.result_id] += score.score_value
            contributions[score.result_id].append(
                Contribution(question_id=int(question_id), answer_id=int(answer_id), score_value=score.score_value)
            )

    # first result to reach the maximum wins; strict > keeps quiz order significant
    winner_id = quiz.results[0].id
    highest = totals[winner_id]
    for result in quiz.results[1:]:
        if totals[result.id] > highest:
            winner_id, highest = result.id, totals[result.id]

    _trace("personality quiz=%s totals=%s winner=%s", quiz.id, totals, winner_id)

    details = PersonalityScoring(
        result_scores=[
            ResultScore(result_id=rid, total_score=totals[rid], contributions=contributions[rid])
            for rid in totals
        ],
        winning_result=WinningResult(result_id=winner_id, total_score=highest),
    )
    return ScoringResult(
        result_id=winner_id,
        score=highest,
        max_possible_score=max_personality_score(quiz),
        calculation=Calculation(type="personality", details=details),
    )


def _score_knowledge(quiz: Quiz, selected_answers: Selections) -> ScoringResult:
    index = index_answers(quiz)
    total_points = 0
    question_scores: List[QuestionScore] = []

    for question_id, answer_id in selected_answers.items():
        answer = _lookup(index, quiz, question_id, answer_id)
        if answer is None:
            continue
        total_points += answer.points
        question_scores.append(
            QuestionScore(
                question_id=int(question_id),
                answer_id=int(answer_id),
                points=answer.points,
                is_correct=answer.points > 0,
            )
        )

    match = next((r for r in quiz.results if r.point_from <= total_points <= r.point_to), None)
    if match is None:
        raise NoMatchingResult(total_points)

    # ceiling comes from the authored bands, not from the best reachable answers
    max_points = max(r.point_to for r in quiz.results)
    correct = sum(1 for qs in question_scores if qs.is_correct)

    _trace("knowledge quiz=%s total=%s result=%s", quiz.id, total_points, match.id)

    details = KnowledgeScoring(
        total_points=total_points,
        max_possible_points=max_points,
        correct_answers=correct,
        total_questions=len(quiz.questions),
        question_scores=question_scores,
    )
    return ScoringResult(
        result_id=match.id,
        score=total_points,
        max_possible_score=max_points,
        calculation=Calculation(type="knowledge", details=details),
    )


def _score_puzzle(quiz: Quiz, selected_answers: Selections) -> ScoringResult:
    if len(quiz.questions) != 1:
        raise InvalidPuzzleConfiguration("Puzzle quiz must have exactly one question")

    question = quiz.questions[0]
    correct_answers = [a for a in question.answers if a.points == 1]
    if len(correct_answers) != 1:
        raise InvalidPuzzleConfiguration(
            f"Puzzle quiz must have exactly one correct answer (found {len(correct_answers)})"
        )
    correct_answer = correct_answers[0]

    selected_id = selected_answers.get(question.id)
    if selected_id is None and len(selected_answers) == 1:
        # one question, one selection: accept it whatever the key looks like
        selected_id = next(iter(selected_answers.values()))
    if selected_id is None or not any(a.id == selected_id for a in question.answers):
        raise InvalidPuzzleConfiguration(
            f"Selected answer {selected_id} does not belong to puzzle question {question.id}"
        )

    is_correct = selected_id == correct_answer.id
    points = 1 if is_correct else 0

    match = next((r for r in quiz.results if r.point_from == points and r.point_to == points), None)
    if match is None:
        raise NoMatchingResult(points, f"No result found for puzzle score: {points}")

    _trace("puzzle quiz=%s selected=%s correct=%s", quiz.id, selected_id, is_correct)

    details = PuzzleScoring(
        is_correct=is_correct,
        selected_answer_id=int(selected_id),
        correct_answer_id=correct_answer.id,
        points=points,
    )
    return ScoringResult(
        result_id=match.id,
        score=points,
        max_possible_score=1,
        calculation=Calculation(type="puzzle", details=details),
    )


_SCORERS: Dict[int, Callable[[Quiz, Selections], ScoringResult]] = {
    PERSONALITY: _score_personality,
    KNOWLEDGE: _score_knowledge,
    PUZZLE: _score_puzzle,
}


def calculate_result(quiz: Quiz, selected_answers: Selections) -> ScoringResult:
    """
    Score one submission.
    selected_answers must cover every question of the quiz; the caller rejects
    incomplete submissions before getting here.
    Raises UnsupportedQuizType, NoMatchingResult or InvalidPuzzleConfiguration.
    """
    scorer = _SCORERS.get(quiz.quiz_type)
    if scorer is None:
        raise UnsupportedQuizType(quiz.quiz_type)
    return scorer(quiz, selected_answers)


def generate_score_description(result: ScoringResult, quiz: Quiz) -> str:
    if quiz.quiz_type in (KNOWLEDGE, PUZZLE):
        return config.SCORE_DESCRIPTION_FORMAT.format(
            score=result.score, max_score=result.max_possible_score
        )
    return ""


__all__ = [
    "calculate_result",
    "generate_score_description",
    "index_answers",
    "max_personality_score",
]
