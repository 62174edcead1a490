from __future__ import annotations
from fastapi import FastAPI, HTTPException, Body, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uuid, os, json, logging, math, typing as t

# ---- Engine imports ----
from quiz_core import config
from quiz_core.config import load_config
from quiz_core.errors import ScoringError
from quiz_core.scoring import calculate_result, generate_score_description
from quiz_core.types import Quiz, QUIZ_TYPE_NAMES
from quiz_core.validators import validate_quiz_configuration
from .storage import (
    list_submissions_for_quiz,
    load_quizzes,
    load_submission,
    save_submission,
    submitted_at,
)

log = logging.getLogger(__name__)

CFG = load_config()
QUIZZES: dict[int, Quiz] = load_quizzes(CFG.get("QUIZ_BANK_PATH") or config.QUIZ_BANK_PATH)

app = FastAPI(title="Quiz Engine API")

@app.get("/")
def root():
    return {"status": "ok", "service": "quiz-engine-api"}

ALLOWED_ORIGINS = [
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,  # keep False unless you use cookies
)

# ---- Schemas ----
class SubmitReq(BaseModel):
    answers: dict[int, int]  # question_id -> answer_id; JSON string keys are coerced

# ---- Helpers ----
def _serialize(obj: t.Any) -> t.Any:
    return json.loads(json.dumps(obj, default=lambda o: getattr(o, "__dict__", o)))


def _summary(quiz: Quiz) -> dict[str, t.Any]:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "sub_title": quiz.sub_title,
        "quiz_type": quiz.quiz_type,
        "quiz_type_name": QUIZ_TYPE_NAMES.get(quiz.quiz_type, "unknown"),
        "questions": len(quiz.questions),
        "visits": quiz.visits,
        "create_date": quiz.create_date,
    }


def _get_quiz(quiz_id: int, *, active_only: bool = True) -> Quiz:
    quiz = QUIZZES.get(quiz_id)
    if not quiz:
        raise HTTPException(404, "quiz not found")
    if active_only and quiz.status != config.ACTIVE_STATUS:
        raise HTTPException(403, "quiz not available")
    return quiz

# ---- Health ----
@app.get("/health")
def health():
    return {
        "quizzes_loaded": len(QUIZZES),
        "data_dir": os.getenv("DATA_DIR", config.DATA_DIR),
        "expose_calculation": config.EXPOSE_CALCULATION,
    }

# ---- Quizzes ----
@app.get("/quizzes")
def list_quizzes(
    quiz_type: int | None = Query(None, alias="type", description="1=personality, 2=knowledge, 3=puzzle"),
    featured: bool = Query(False, description="starred quizzes only, most visited first"),
    page: int = Query(1, ge=1),
    limit: int = Query(config.PAGE_SIZE_DEFAULT, ge=1),
):
    limit = min(limit, config.PAGE_SIZE_MAX)
    rows = [
        q for q in QUIZZES.values()
        if q.status == config.ACTIVE_STATUS
        and (quiz_type is None or q.quiz_type == quiz_type)
        and (not featured or q.star_flag == 1)
    ]
    # undated quizzes sort last, in bank order
    if featured:
        rows.sort(key=lambda q: q.visits, reverse=True)
    else:
        rows.sort(key=lambda q: q.create_date or "", reverse=True)
    start = (page - 1) * limit
    return {
        "quizzes": [_summary(q) for q in rows[start:start + limit]],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": len(rows),
            "total_pages": math.ceil(len(rows) / limit),
        },
    }


@app.get("/quizzes/{quiz_id}")
def get_quiz(quiz_id: int):
    return _serialize(_get_quiz(quiz_id))


@app.get("/quizzes/{quiz_id}/validate")
def validate_quiz(quiz_id: int):
    quiz = _get_quiz(quiz_id, active_only=False)
    return {"quiz_id": quiz_id, **_serialize(validate_quiz_configuration(quiz))}


@app.post("/quizzes/{quiz_id}/submit")
def submit(quiz_id: int, payload: SubmitReq = Body(...)):
    quiz = _get_quiz(quiz_id)
    selected = payload.answers

    missing = [q.id for q in quiz.questions if q.id not in selected]
    if missing:
        return JSONResponse(
            status_code=400,
            content={"error": "All questions must be answered", "missing_questions": missing},
        )

    try:
        scored = calculate_result(quiz, selected)
    except ScoringError as e:
        log.error("scoring failed for quiz %s: %s", quiz_id, e)
        return JSONResponse(status_code=500, content={"error": str(e), "code": e.code})

    result = quiz.result_by_id(scored.result_id)
    if result is None:
        raise HTTPException(500, "result not found")

    submission_id = str(uuid.uuid4())
    created = submitted_at()
    response: dict[str, t.Any] = {
        "submission_id": submission_id,
        "quiz_id": quiz_id,
        "result": _serialize(result),
        "score": scored.score,
        "max_score": scored.max_possible_score,
        "score_description": generate_score_description(scored, quiz),
        "created_at": created,
    }
    if config.EXPOSE_CALCULATION:
        response["calculation"] = _serialize(scored.calculation)

    record = dict(response)
    record["answers"] = {str(k): v for k, v in selected.items()}
    record["calculation"] = _serialize(scored.calculation)
    save_submission(
        submission_id,
        record,
        {
            "quizId": quiz_id,
            "resultId": scored.result_id,
            "score": scored.score,
            "createdAt": created,
        },
    )
    return response


@app.get("/quizzes/{quiz_id}/submissions")
def quiz_submissions(quiz_id: int):
    _get_quiz(quiz_id, active_only=False)
    return {"submissions": list_submissions_for_quiz(quiz_id)}


@app.get("/submissions/{submission_id}")
def get_submission(submission_id: str):
    record = load_submission(submission_id)
    if not record:
        raise HTTPException(404, "submission not found")
    return record
