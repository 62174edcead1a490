from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str | None) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DATA_DIR: str = "data"
QUIZ_BANK_PATH: str | None = None

ACTIVE_STATUS: int = 1

SCORE_DESCRIPTION_FORMAT: str = "{score} of {max_score}"
EXPOSE_CALCULATION: bool = True

PAGE_SIZE_DEFAULT: int = 20
PAGE_SIZE_MAX: int = 100

DEBUG_TRACE: bool = False
LOG_LEVEL: str = "INFO"

# // env overrides for staging/ops; defaults remain conservative.
DATA_DIR = _env_str("DATA_DIR", DATA_DIR) or DATA_DIR
QUIZ_BANK_PATH = _env_str("QUIZ_BANK_PATH", QUIZ_BANK_PATH)
SCORE_DESCRIPTION_FORMAT = _env_str("SCORE_DESCRIPTION_FORMAT", SCORE_DESCRIPTION_FORMAT) or SCORE_DESCRIPTION_FORMAT
EXPOSE_CALCULATION = _env_bool("EXPOSE_CALCULATION", EXPOSE_CALCULATION)
PAGE_SIZE_DEFAULT = _env_int("PAGE_SIZE_DEFAULT", PAGE_SIZE_DEFAULT)
PAGE_SIZE_MAX = _env_int("PAGE_SIZE_MAX", PAGE_SIZE_MAX)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)
LOG_LEVEL = (_env_str("LOG_LEVEL", LOG_LEVEL) or LOG_LEVEL).upper()


def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except ValueError: cfg = {}
    e = os.environ
    if e.get("DATA_DIR"): cfg["DATA_DIR"] = e.get("DATA_DIR")
    if e.get("QUIZ_BANK_PATH"): cfg["QUIZ_BANK_PATH"] = e.get("QUIZ_BANK_PATH")
    if e.get("SCORE_DESCRIPTION_FORMAT"): cfg["SCORE_DESCRIPTION_FORMAT"] = e.get("SCORE_DESCRIPTION_FORMAT")
    if e.get("EXPOSE_CALCULATION"): cfg["EXPOSE_CALCULATION"] = _env_bool("EXPOSE_CALCULATION", EXPOSE_CALCULATION)
    if e.get("LOG_LEVEL"): cfg["LOG_LEVEL"] = e.get("LOG_LEVEL", "").upper()
    return cfg
