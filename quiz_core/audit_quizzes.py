from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from .quiz_bank import load_bank
from .types import Quiz, QUIZ_TYPE_NAMES
from .validators import validate_quiz_configuration


def _blank_totals() -> dict[str, int]:
    totals = {name: 0 for name in QUIZ_TYPE_NAMES.values()}
    totals.update({"unknown": 0, "valid": 0, "invalid": 0})
    return totals


def audit_quizzes(quizzes: Iterable[Quiz]) -> dict[str, object]:
    coverage: dict[str, dict[str, object]] = {}
    totals = _blank_totals()
    warnings: list[str] = []

    for quiz in quizzes:
        type_name = QUIZ_TYPE_NAMES.get(quiz.quiz_type, "unknown")
        totals[type_name] += 1
        report = validate_quiz_configuration(quiz)
        totals["valid" if report.is_valid else "invalid"] += 1
        coverage[str(quiz.id)] = {
            "title": quiz.title,
            "type": type_name,
            "questions": len(quiz.questions),
            "results": len(quiz.results),
            "errors": list(report.errors),
        }
        for msg in report.errors:
            warnings.append(f"Quiz {quiz.id} ({type_name}): {msg}")

    summary = {"quizzes": coverage, "warnings": warnings, "totals": totals}
    return summary


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["quizzes"]  # type: ignore[assignment]
    print("=== Quiz Bank Audit ===")
    for quiz_id in sorted(coverage, key=lambda k: (len(k), k)):
        data = coverage[quiz_id]
        print(f"\nQuiz {quiz_id}: {data['title']}")
        print(f"  type={data['type']}  questions={data['questions']}  results={data['results']}")
        errors: list[str] = data["errors"]  # type: ignore[assignment]
        print("  ok" if not errors else f"  {len(errors)} problem(s)")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    totals = summary["totals"]
    print("\nTotals:", totals)


def write_summary(summary: dict[str, object], path: Path = Path("quiz_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validate every quiz in a bank before publishing.")
    ap.add_argument("--bank", default=None, help="quiz bank JSON (defaults to the bundled bank)")
    ap.add_argument("--out", default="quiz_audit.json", help="where to write the JSON summary")
    a = ap.parse_args(argv)

    quizzes = load_bank(a.bank)
    summary = audit_quizzes(quizzes)
    print_report(summary)
    write_summary(summary, Path(a.out))
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
