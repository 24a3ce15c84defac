# __main__.py - command line entry points for running and debugging quiz jobs

import sys
import logging
import argparse

import requests

from quiz_solver import config
from quiz_solver.fetch import submit_answer
from quiz_solver.job import run_job, submission_payload
from quiz_solver.models import QuizTask
from quiz_solver.pdf_text import extract_document_text, page_text
from quiz_solver.table_sum import format_answer, sum_page


def cmd_solve(args):
    outcome = run_job(QuizTask(args.email, args.secret, args.url))
    print(outcome)
    return 0 if outcome.status in ("submitted", "demo_submitted") else 1


def cmd_submit(args):
    task = QuizTask(args.email, args.secret, args.url)
    with requests.Session() as session:
        r = submit_answer(session, args.submit_url, submission_payload(task, args.answer))
    if r is None:
        return 1
    print("status", r.status_code)
    print("body", r.text)
    return 0 if r.ok else 1


def cmd_sum(args):
    with open(args.pdf, "rb") as f:
        text = extract_document_text(f.read())
    result = sum_page(page_text(text, args.page), args.column)
    print(f"{format_answer(result.total)} ({result.method})")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="quiz_solver", description="Solve PDF table quizzes.")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Run one quiz job in the foreground")
    solve.add_argument("url")
    solve.add_argument("--email", required=True)
    solve.add_argument("--secret", required=True)
    solve.set_defaults(func=cmd_solve)

    submit = sub.add_parser("submit", help="POST a single answer to a submit endpoint")
    submit.add_argument("submit_url")
    submit.add_argument("--url", required=True, help="Quiz URL the answer belongs to")
    submit.add_argument("--email", required=True)
    submit.add_argument("--secret", required=True)
    submit.add_argument("--answer", required=True)
    submit.set_defaults(func=cmd_submit)

    total = sub.add_parser("sum", help="Sum a column of a local PDF page")
    total.add_argument("pdf")
    total.add_argument("--page", type=int, default=config.TARGET_PAGE)
    total.add_argument("--column", default=config.VALUE_COLUMN)
    total.set_defaults(func=cmd_sum)
    return parser


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
