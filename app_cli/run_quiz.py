from __future__ import annotations
import argparse, json, logging, sys
from quiz_core import config
from quiz_core.errors import ScoringError
from quiz_core.quiz_bank import load_bank
from quiz_core.scoring import calculate_result, generate_score_description
from quiz_core.types import Question, QUIZ_TYPE_NAMES

def ask(question: Question, number: int) -> int:
    print(f"\n[{number}] {question.title}")
    for i, ans in enumerate(question.answers): print(f"  [{i}] {ans.title}")
    while True:
        v = input("Your choice (index): ").strip()
        if v.isdigit() and int(v) < len(question.answers):
            return question.answers[int(v)].id
        print("Enter one of the listed indexes.")

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Take a quiz in the terminal.")
    ap.add_argument("--quiz", type=int, required=True)
    ap.add_argument("--bank", default=config.QUIZ_BANK_PATH)
    ap.add_argument("--trace", action="store_true", help="print the calculation trace as JSON")
    a = ap.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(message)s")

    quizzes = {q.id: q for q in load_bank(a.bank)}
    quiz = quizzes.get(a.quiz)
    if quiz is None:
        print(f"Quiz {a.quiz} not found. Available: {', '.join(str(k) for k in quizzes)}", file=sys.stderr)
        return 1

    print(f"{quiz.title} ({QUIZ_TYPE_NAMES.get(quiz.quiz_type, 'unknown')})")
    selected = {q.id: ask(q, n) for n, q in enumerate(quiz.questions, start=1)}
    try:
        scored = calculate_result(quiz, selected)
    except ScoringError as e:
        print(f"This quiz is misconfigured: {e}", file=sys.stderr)
        return 2

    result = quiz.result_by_id(scored.result_id)
    print(f"\nYour result: {result.title if result else scored.result_id}")
    desc = generate_score_description(scored, quiz)
    if desc: print(f"Score: {desc}")
    if a.trace:
        print(json.dumps(scored.calculation, default=lambda o: getattr(o, "__dict__", o), indent=2))
    return 0

if __name__ == "__main__": raise SystemExit(main())
