from __future__ import annotations
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional
from .types import Quiz, Question, Answer, Result, Score, QUIZ_TYPE_NAMES, ACTIVE

BANK_PATH = Path(__file__).resolve().parent / "data" / "quizzes.json"
_TYPE_BY_NAME = {name: code for code, name in QUIZ_TYPE_NAMES.items()}


def _pick(raw: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    # accepts both the camelCase export shape and snake_case
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return default


def _quiz_type(value: Any) -> Any:
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TYPE_BY_NAME:
            return _TYPE_BY_NAME[v]
        if v.isdigit():
            return int(v)
    return value


def score_from_dict(raw: Dict[str, Any]) -> Score:
    return Score(
        answer_id=int(_pick(raw, "answer_id", "answerId")),
        result_id=int(_pick(raw, "result_id", "resultId")),
        score_value=int(_pick(raw, "score_value", "scoreValue", default=0)),
        id=_pick(raw, "id"),
    )


def quiz_from_dict(raw: Dict[str, Any]) -> Quiz:
    quiz_id = int(raw["id"])
    questions: List[Question] = []
    for q in raw.get("questions") or []:
        answers = [
            Answer(
                id=int(a["id"]),
                title=str(_pick(a, "title", default="")),
                points=int(_pick(a, "points", default=0)),
                question_id=int(_pick(a, "question_id", "questionId", default=q["id"])),
                scores=[score_from_dict(s) for s in a.get("scores") or []],
            )
            for a in q.get("answers") or []
        ]
        questions.append(Question(id=int(q["id"]), title=str(_pick(q, "title", default="")),
                                  quiz_id=quiz_id, answers=answers))

    by_answer = {a.id: a for q in questions for a in q.answers}
    for s in raw.get("scores") or []:
        score = score_from_dict(s)
        answer = by_answer.get(score.answer_id)
        if answer is None:
            continue
        # the same row may be exported under both the answer and the quiz
        if score.id is not None and any(x.id == score.id for x in answer.scores):
            continue
        answer.scores.append(score)

    results = [
        Result(
            id=int(r["id"]),
            title=str(_pick(r, "title", default="")),
            sub_title=_pick(r, "sub_title", "subTitle"),
            quiz_id=quiz_id,
            point_from=int(_pick(r, "point_from", "pointFrom", default=0)),
            point_to=int(_pick(r, "point_to", "pointTo", default=0)),
            scores=[score_from_dict(s) for s in r.get("scores") or []],
        )
        for r in raw.get("results") or []
    ]
    return Quiz(
        id=quiz_id,
        quiz_type=_quiz_type(_pick(raw, "quiz_type", "quizType")),
        questions=questions,
        results=results,
        title=str(_pick(raw, "title", default="")),
        sub_title=_pick(raw, "sub_title", "subTitle"),
        status=int(_pick(raw, "status", default=ACTIVE)),
        score_flag=int(_pick(raw, "score_flag", "scoreFlag", default=0)),
        star_flag=int(_pick(raw, "star_flag", "starFlag", default=0)),
        visits=int(_pick(raw, "visits", default=0)),
        create_date=_pick(raw, "create_date", "createDate"),
    )


def quiz_to_dict(quiz: Quiz) -> Dict[str, Any]:
    return asdict(quiz)


def quizzes_from_json(text: str) -> List[Quiz]:
    raw = json.loads(text)
    if isinstance(raw, dict):
        raw = raw.get("quizzes", [])
    return [quiz_from_dict(r) for r in raw]


def load_bank(path: Optional[str | Path] = None) -> List[Quiz]:
    if path:
        return quizzes_from_json(Path(path).read_text(encoding="utf-8"))
    return quizzes_from_json(BANK_PATH.read_text(encoding="utf-8"))
