"""JSON-file persistence for the quiz service.

Quizzes are read from ``$DATA_DIR/quizzes.json`` when present, otherwise from
the configured or bundled quiz bank. Each scored submission is written to
``$DATA_DIR/submissions/<id>.json`` and summarised in an index file so it can
be fetched back by id or listed per quiz.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from quiz_core.quiz_bank import load_bank
from quiz_core.types import Quiz


DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
SUBMISSIONS_DIR = DATA_ROOT / "submissions"
SUBMISSION_INDEX_PATH = DATA_ROOT / "submissions_index.json"
QUIZZES_PATH = DATA_ROOT / "quizzes.json"

log = logging.getLogger(__name__)

_LOCK = threading.Lock()


def _read_json(path: Path, default: Any) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default
    except (OSError, ValueError) as e:
        log.warning("unreadable store file %s (%s); treating it as empty", path, e)
        return default


def _write_json(path: Path, payload: Any) -> None:
    # readers only ever see a complete file
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


def submitted_at() -> str:
    """UTC timestamp to the second, e.g. ``2024-05-01T12:00:00Z``."""

    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def load_quizzes(bank_path: Optional[str] = None) -> Dict[int, Quiz]:
    """Quizzes keyed by id, in file order."""

    source = QUIZZES_PATH if QUIZZES_PATH.exists() else bank_path
    return {quiz.id: quiz for quiz in load_bank(source)}


def save_submission(submission_id: str, record: Dict[str, Any], metadata: Dict[str, Any]) -> None:
    """Persist the scored submission, then register it in the per-quiz index."""

    _write_json(SUBMISSIONS_DIR / f"{submission_id}.json", record)
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(SUBMISSION_INDEX_PATH, {})
        index[submission_id] = metadata
        _write_json(SUBMISSION_INDEX_PATH, index)


def load_submission(submission_id: str) -> Optional[Dict[str, Any]]:
    return _read_json(SUBMISSIONS_DIR / f"{submission_id}.json", None)


def list_submissions_for_quiz(quiz_id: int) -> List[Dict[str, Any]]:
    """Index entries for one quiz, newest first."""

    index: Dict[str, Dict[str, Any]] = _read_json(SUBMISSION_INDEX_PATH, {})
    rows = [{**meta, "id": sid} for sid, meta in index.items() if meta.get("quizId") == quiz_id]
    return sorted(rows, key=lambda r: r.get("createdAt", ""), reverse=True)
