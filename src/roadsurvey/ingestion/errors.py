from __future__ import annotations

from dataclasses import dataclass


class SurveyError(Exception):
    """Base class for failures while turning one survey log into outputs."""


class SchemaError(SurveyError):
    """The XML document lacks a section the survey layout requires."""


class SampleGapError(SchemaError):
    """A sample expected at a computed position is missing from the sample map."""


class EmptyInputError(SurveyError):
    """No samples were selected for a file, so no assay can be summarized."""


class EntryParseError(SurveyError):
    """A single log entry carries a value that cannot be parsed."""


@dataclass(frozen=True)
class SurveyErrorInfo:
    code: str
    kind: str
    message: str


def classify_survey_error(exc: Exception) -> SurveyErrorInfo:
    """Classify per-file failures into stable codes for logs and the run ledger."""

    text = str(exc)

    if isinstance(exc, SampleGapError):
        return SurveyErrorInfo(code="sample_gap", kind="schema", message=text)
    if isinstance(exc, SchemaError):
        return SurveyErrorInfo(code="schema", kind="schema", message=text)
    if isinstance(exc, EmptyInputError):
        return SurveyErrorInfo(code="empty_input", kind="data", message=text)
    if isinstance(exc, EntryParseError):
        return SurveyErrorInfo(code="parse", kind="data", message=text)

    if isinstance(exc, FileNotFoundError):
        return SurveyErrorInfo(code="not_found", kind="io", message=text)
    if isinstance(exc, PermissionError):
        return SurveyErrorInfo(code="permission", kind="io", message=text)
    if isinstance(exc, UnicodeDecodeError):
        return SurveyErrorInfo(code="encoding", kind="io", message=text)
    if isinstance(exc, OSError):
        return SurveyErrorInfo(code="io_error", kind="io", message=text)

    return SurveyErrorInfo(code="unknown", kind="unknown", message=text)
