"""Command-line interface for exploring survey data."""

from __future__ import annotations

import argparse
import sys
from functools import partial
from pathlib import Path
from typing import TextIO

from .analyzer import SurveyAnalyzer
from .errors import SurveyError

DEFAULT_FILE = "../so_2024_raw.xlsx"
VERSION = "0.1.0"

_REPL_HELP = """\
  list [limit] - List questions
  search <term> - Search questions
  searchopt <term> - Search options
  dist <question_id> - Show distribution
  subset <question_id> <option> - Create subset
  help - Show this help
  quit - Exit"""

_REPL_WELCOME = """\
Welcome to the Stack Overflow Survey Analyzer REPL!
Available commands:
  list [limit] - List questions (optionally limit to N questions)
  search <term> - Search questions
  searchopt <term> - Search options
  dist <question_id> - Show distribution for question
  subset <question_id> <option> - Create subset
  help - Show this help
  quit - Exit
"""


def _parse_index(text: str) -> int | None:
    """Parse a non-negative integer, or return None."""
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        return int(digits)
    return None


def _index_arg(text: str) -> int:
    value = _parse_index(text)
    if value is None:
        raise argparse.ArgumentTypeError(f"invalid non-negative integer: {text!r}")
    return value


def _cmd_structure(analyzer: SurveyAnalyzer, args: argparse.Namespace, out: TextIO) -> None:
    emit = partial(print, file=out)
    questions = list(analyzer.get_survey_structure())
    if args.filter is not None:
        questions = analyzer.search_questions(args.filter)
    if args.limit is not None:
        questions = questions[: args.limit]

    emit(f"Survey Structure ({len(questions)} questions):")
    emit("-" * 80)
    for question in questions:
        emit(f"Question {question.id}: {question.text}")
        emit(f"  Type: {question.question_type}")
        if question.options:
            emit(f"  Options: {', '.join(question.options)}")
        emit()


def _cmd_search(analyzer: SurveyAnalyzer, args: argparse.Namespace, out: TextIO) -> None:
    emit = partial(print, file=out)
    if args.options:
        matches = analyzer.search_options(args.term)
        emit(f"Found {len(matches)} option(s) containing '{args.term}':")
        for question_id, option in matches:
            emit(f"  Question {question_id}: {option}")
    else:
        questions = analyzer.search_questions(args.term)
        emit(f"Found {len(questions)} question(s) containing '{args.term}':")
        for question in questions:
            emit(f"  Question {question.id}: {question.text}")


def _cmd_subset(analyzer: SurveyAnalyzer, args: argparse.Namespace, out: TextIO) -> None:
    print(analyzer.create_subset(args.question_id, args.option).display(), file=out)


def _cmd_distribution(analyzer: SurveyAnalyzer, args: argparse.Namespace, out: TextIO) -> None:
    emit = partial(print, file=out)
    distribution = analyzer.get_distribution(args.question_id)
    emit(distribution.display())
    if args.threshold > 0.0:
        above = distribution.above_threshold(args.threshold)
        if above:
            emit(f"\nAnswers above {args.threshold:.1f}% threshold:")
            for option, count, percentage in above:
                emit(f"  {option}: {count} ({percentage:.1f}%)")


def _cmd_repl(analyzer: SurveyAnalyzer, args: argparse.Namespace, out: TextIO) -> None:
    run_repl(analyzer, output=out)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the survey command line."""
    parser = argparse.ArgumentParser(
        prog="so-survey-cli", description="Stack Overflow Survey Data Analyzer"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=Path(DEFAULT_FILE),
        help="Path to the Excel survey data file",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    structure = commands.add_parser(
        "structure", help="Display the survey structure (list of questions)"
    )
    structure.add_argument("-l", "--limit", type=_index_arg, help="Show only first N questions")
    structure.add_argument("-f", "--filter", help="Show questions containing this term")
    structure.set_defaults(handler=_cmd_structure)

    search = commands.add_parser("search", help="Search for questions or options")
    search.add_argument("term", help="Search term")
    search.add_argument(
        "-o", "--options", action="store_true", help="Search in options instead of questions"
    )
    search.set_defaults(handler=_cmd_search)

    subset = commands.add_parser("subset", help="Create a subset of respondents")
    subset.add_argument("question_id", type=_index_arg, help="Question ID")
    subset.add_argument("option", help="Answer option to filter by")
    subset.set_defaults(handler=_cmd_subset)

    distribution = commands.add_parser(
        "distribution", help="Display answer distribution for a question"
    )
    distribution.add_argument("question_id", type=_index_arg, help="Question ID")
    distribution.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=0.0,
        help="Minimum percentage threshold to display",
    )
    distribution.set_defaults(handler=_cmd_distribution)

    repl = commands.add_parser("repl", help="Interactive REPL mode")
    repl.set_defaults(handler=_cmd_repl)
    return parser


def run_repl(
    analyzer: SurveyAnalyzer,
    input_stream: TextIO | None = None,
    output: TextIO | None = None,
) -> None:
    """Read commands line by line until quit or end of input."""
    stdin = input_stream if input_stream is not None else sys.stdin
    out = output if output is not None else sys.stdout
    emit = partial(print, file=out)

    emit(_REPL_WELCOME)
    while True:
        out.write("survey> ")
        out.flush()
        line = stdin.readline()
        if not line:
            break
        parts = line.split()
        if not parts:
            continue

        command, args = parts[0], parts[1:]
        match command:
            case "quit" | "exit":
                break
            case "help":
                emit("Available commands:")
                emit(_REPL_HELP)
            case "list":
                questions = analyzer.get_survey_structure()
                limit = _parse_index(args[0]) if args else None
                count = min(len(questions) if limit is None else limit, len(questions))
                for question in questions[:count]:
                    emit(f"{question.id}: {question.text}")
                emit(f"({count} of {len(questions)} questions shown)")
            case "search":
                if not args:
                    emit("Usage: search <term>")
                    continue
                for question in analyzer.search_questions(" ".join(args)):
                    emit(f"{question.id}: {question.text}")
            case "searchopt":
                if not args:
                    emit("Usage: searchopt <term>")
                    continue
                for question_id, option in analyzer.search_options(" ".join(args)):
                    emit(f"Q{question_id}: {option}")
            case "dist":
                if not args:
                    emit("Usage: dist <question_id>")
                    continue
                question_id = _parse_index(args[0])
                if question_id is None:
                    emit("Invalid question ID")
                else:
                    try:
                        emit(analyzer.get_distribution(question_id).display())
                    except SurveyError as exc:
                        emit(f"Error: {exc}")
            case "subset":
                if len(args) < 2:
                    emit("Usage: subset <question_id> <option>")
                    continue
                question_id = _parse_index(args[0])
                if question_id is None:
                    emit("Invalid question ID")
                else:
                    try:
                        subset = analyzer.create_subset(question_id, " ".join(args[1:]))
                        emit(subset.display())
                    except SurveyError as exc:
                        emit(f"Error: {exc}")
            case _:
                emit(f"Unknown command: {command}. Type 'help' for available commands.")
        emit()

    emit("Goodbye!")


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = build_parser().parse_args(argv)
    out = sys.stdout
    try:
        print(f'Loading survey data from: "{args.file}"', file=out)
        analyzer = SurveyAnalyzer.from_excel(args.file)
        print(
            f"Loaded {len(analyzer.get_survey_structure())} questions with "
            f"{analyzer.survey.respondent_count} total respondents\n",
            file=out,
        )
        args.handler(analyzer, args, out)
    except SurveyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())