"""Guided tour of the analyzer on a survey file."""

from __future__ import annotations

import sys
from functools import partial
from typing import TextIO

from .analyzer import SurveyAnalyzer
from .errors import SurveyError

DEFAULT_FILE = "../so_2024_raw.xlsx"


def run(analyzer: SurveyAnalyzer, output: TextIO | None = None) -> None:
    """Print a sequence of example analyses of a loaded survey."""
    emit = partial(print, file=output if output is not None else sys.stdout)
    questions = analyzer.get_survey_structure()
    emit(
        f"✓ Loaded {len(questions)} questions with "
        f"{analyzer.survey.respondent_count} respondents\n"
    )

    emit("1. Searching for language-related questions:")
    for question in analyzer.search_questions("language")[:3]:
        emit(f"   • Question {question.id}: {question.text}")
    emit()

    emit("2. Analyzing remote work patterns:")
    remote_questions = analyzer.search_questions("remote")
    if remote_questions:
        question = remote_questions[0]
        try:
            distribution = analyzer.get_distribution(question.id)
        except SurveyError as exc:
            emit(f"   Error analyzing distribution: {exc}")
        else:
            emit(f"   Question: {question.text}")
            popular = distribution.most_popular()
            if popular is not None:
                option, count, percentage = popular
                emit(f"   Most popular: {option} ({count} responses, {percentage:.1f}%)")
            emit("   Options with >20% share:")
            for option, count, percentage in distribution.above_threshold(20.0):
                emit(f"     - {option}: {count} ({percentage:.1f}%)")
    emit()

    emit("3. Creating respondent subsets:")
    if remote_questions:
        try:
            remote_workers = analyzer.create_subset(remote_questions[0].id, "Remote")
        except SurveyError as exc:
            emit(f"   Error creating subset: {exc}")
        else:
            emit(
                f"   Remote workers: {remote_workers.size()} respondents "
                f"({remote_workers.percentage():.1f}% of total)"
            )
            employment_questions = analyzer.search_questions("employment")
            if employment_questions:
                try:
                    fulltime = analyzer.create_subset(employment_questions[0].id, "full-time")
                except SurveyError:
                    emit("   Could not create full-time subset")
                else:
                    both = remote_workers.intersect(fulltime)
                    emit(f"   Remote full-time workers: {len(both)} respondents")
    emit()

    emit("4. Survey structure overview:")
    emit("   First 5 questions:")
    for question in questions[:5]:
        emit(
            f"   • Q{question.id}: {question.text[:50]}... "
            f"(Type: {question.question_type})"
        )

    emit("\n✓ Analysis complete!")


def main(argv: list[str] | None = None) -> int:
    """Load a survey (path from the first argument) and run the tour."""
    args = sys.argv[1:] if argv is None else argv
    path = args[0] if args else DEFAULT_FILE
    print("Stack Overflow Survey Analyzer - Basic Usage Example")
    print("====================================================")
    print("Loading survey data...")
    try:
        analyzer = SurveyAnalyzer.from_excel(path)
    except SurveyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    run(analyzer, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())