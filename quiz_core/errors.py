"""Scoring failures. All of them mean the quiz is misconfigured, never that the
user's input is bad, so callers should surface them rather than retry."""

from __future__ import annotations


class ScoringError(ValueError):
    """Base class for failures raised by the scoring engine."""

    code = "scoring_error"


class UnsupportedQuizType(ScoringError):
    code = "unsupported_quiz_type"

    def __init__(self, quiz_type: object) -> None:
        super().__init__(f"Unsupported quiz type: {quiz_type}")
        self.quiz_type = quiz_type


class NoMatchingResult(ScoringError):
    """Raised when no result band contains the computed score."""

    code = "no_matching_result"

    def __init__(self, score: int | None, message: str | None = None) -> None:
        super().__init__(message or f"No result found for score: {score}")
        self.score = score


class InvalidPuzzleConfiguration(ScoringError):
    code = "invalid_puzzle_configuration"


__all__ = ["ScoringError", "UnsupportedQuizType", "NoMatchingResult", "InvalidPuzzleConfiguration"]
