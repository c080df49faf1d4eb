"""Exceptions raised while loading and analysing survey data."""

from __future__ import annotations


class SurveyError(Exception):
    """Base class for every error raised by this package."""


class SurveyIOError(SurveyError):
    """Reading or writing a file failed."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"IO error: {detail}")


class ExcelError(SurveyError):
    """The workbook could not be opened or parsed."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"Excel parsing error: {detail}")


class QuestionNotFoundError(SurveyError):
    """No question has the requested id."""

    def __init__(self, question_id: object) -> None:
        self.question_id = question_id
        super().__init__(f"Question not found with ID: {question_id}")


class InvalidQuestionTypeError(SurveyError):
    """The operation does not apply to the question's type."""

    def __init__(self) -> None:
        super().__init__("Invalid question type for operation")


class OptionNotFoundError(SurveyError):
    """The requested answer option does not exist."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Option not found: {option}")


class DataParsingError(SurveyError):
    """The survey data has an unexpected shape."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Data parsing error: {detail}")


class EmptyDatasetError(SurveyError):
    """The dataset holds no data."""

    def __init__(self) -> None:
        super().__init__("Empty dataset")