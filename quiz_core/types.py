from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Literal, Union

QuizType = Literal[1, 2, 3]
PERSONALITY: QuizType = 1
KNOWLEDGE: QuizType = 2
PUZZLE: QuizType = 3
QUIZ_TYPE_NAMES: Dict[int, str] = {PERSONALITY: "personality", KNOWLEDGE: "knowledge", PUZZLE: "puzzle"}

QuizStatus = Literal[1, 2]
ACTIVE: QuizStatus = 1
INACTIVE: QuizStatus = 2

CalculationType = Literal["personality", "knowledge", "puzzle"]

# ---- quiz definition (read-only to the engine) ----
@dataclass
class Score:
    answer_id: int; result_id: int; score_value: int
    id: Optional[int] = None
@dataclass
class Answer:
    id: int; title: str = ""
    points: int = 0
    question_id: Optional[int] = None
    scores: List[Score] = field(default_factory=list)
@dataclass
class Question:
    id: int; title: str = ""
    quiz_id: Optional[int] = None
    answers: List[Answer] = field(default_factory=list)
@dataclass
class Result:
    id: int; title: str = ""
    sub_title: Optional[str] = None
    quiz_id: Optional[int] = None
    point_from: int = 0
    point_to: int = 0
    scores: List[Score] = field(default_factory=list)
@dataclass
class Quiz:
    id: int
    quiz_type: int
    questions: List[Question] = field(default_factory=list)
    results: List[Result] = field(default_factory=list)
    title: str = ""
    sub_title: Optional[str] = None
    status: int = ACTIVE
    score_flag: int = 0
    star_flag: int = 0
    visits: int = 0
    create_date: Optional[str] = None  # ISO 8601

    def result_by_id(self, result_id: int) -> Optional[Result]:
        return next((r for r in self.results if r.id == result_id), None)

# ---- scoring output ----
@dataclass
class Contribution:
    question_id: int; answer_id: int; score_value: int
@dataclass
class ResultScore:
    result_id: int
    total_score: int
    contributions: List[Contribution] = field(default_factory=list)
@dataclass
class WinningResult:
    result_id: int; total_score: int
@dataclass
class PersonalityScoring:
    result_scores: List[ResultScore]
    winning_result: WinningResult
@dataclass
class QuestionScore:
    question_id: int; answer_id: int; points: int; is_correct: bool
@dataclass
class KnowledgeScoring:
    total_points: int
    max_possible_points: int
    correct_answers: int
    total_questions: int
    question_scores: List[QuestionScore] = field(default_factory=list)
@dataclass
class PuzzleScoring:
    is_correct: bool
    selected_answer_id: int
    correct_answer_id: int
    points: int
@dataclass
class Calculation:
    type: CalculationType
    details: Union[PersonalityScoring, KnowledgeScoring, PuzzleScoring]
@dataclass
class ScoringResult:
    result_id: int
    score: int
    max_possible_score: int
    calculation: Calculation
@dataclass
class ValidationReport:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
