from __future__ import annotations
from typing import List
from .types import Quiz, ValidationReport, PERSONALITY, KNOWLEDGE, PUZZLE


def validate_quiz_configuration(quiz: Quiz) -> ValidationReport:
    """Pre-publish check. Collects every problem instead of stopping at the first; never raises."""
    errors: List[str] = []
    if not quiz.questions:
        errors.append("Quiz must have at least one question")
    if not quiz.results:
        errors.append("Quiz must have at least one result")
    for q_idx, question in enumerate(quiz.questions, start=1):
        if not question.answers:
            errors.append(f"Question {q_idx} has no answers")

    if quiz.quiz_type == PERSONALITY:
        _validate_personality(quiz, errors)
    elif quiz.quiz_type == KNOWLEDGE:
        _validate_knowledge(quiz, errors)
    elif quiz.quiz_type == PUZZLE:
        _validate_puzzle(quiz, errors)
    else:
        errors.append(f"Unsupported quiz type: {quiz.quiz_type}")
    return ValidationReport(is_valid=not errors, errors=errors)


def _validate_personality(quiz: Quiz, errors: List[str]) -> None:
    for q_idx, question in enumerate(quiz.questions, start=1):
        for a_idx, answer in enumerate(question.answers, start=1):
            if not answer.scores:
                errors.append(f"Question {q_idx}, Answer {a_idx} has no score associations")
    positive = {s.result_id for q in quiz.questions for a in q.answers for s in a.scores if s.score_value > 0}
    for r_idx, result in enumerate(quiz.results, start=1):
        if result.id not in positive:
            errors.append(f"Result {r_idx} has no positive score associations")


def _validate_knowledge(quiz: Quiz, errors: List[str]) -> None:
    for r_idx, result in enumerate(quiz.results, start=1):
        if result.point_from > result.point_to:
            errors.append(f"Result {r_idx} has pointFrom greater than pointTo")
    ranges = sorted((r.point_from, r.point_to) for r in quiz.results)
    # touching bounds ([0,5] and [5,10]) count as overlap
    for (_, prev_to), (next_from, _) in zip(ranges, ranges[1:]):
        if prev_to >= next_from:
            errors.append("Result point ranges overlap")
            break
    for q_idx, question in enumerate(quiz.questions, start=1):
        if not any(a.points > 0 for a in question.answers):
            errors.append(f"Question {q_idx} has no correct answers (points > 0)")


def _validate_puzzle(quiz: Quiz, errors: List[str]) -> None:
    if len(quiz.questions) != 1:
        errors.append("Puzzle quiz must have exactly one question")
    if len(quiz.results) != 2:
        errors.append("Puzzle quiz must have exactly two results (correct/incorrect)")
    if quiz.questions:
        answers = quiz.questions[0].answers
        if sum(1 for a in answers if a.points == 1) != 1:
            errors.append("Puzzle quiz must have exactly one correct answer (points = 1)")
        if not any(a.points == 0 for a in answers):
            errors.append("Puzzle quiz must have at least one incorrect answer (points = 0)")
    if not any(r.point_from == 1 and r.point_to == 1 for r in quiz.results):
        errors.append("Puzzle quiz missing correct result (pointFrom=1, pointTo=1)")
    if not any(r.point_from == 0 and r.point_to == 0 for r in quiz.results):
        errors.append("Puzzle quiz missing incorrect result (pointFrom=0, pointTo=0)")
