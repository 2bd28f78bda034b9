import pytest
from pydantic import ValidationError

from .core_types import (
    CompilerError,
    CompilerResult,
    DecodeOutcome,
    ProcessOutcome,
    ProcessStartError,
    TranspilerException,
)


# --- Tests for CompilerError ---


def test_compiler_error_defaults():
    """Only the message is required; column defaults to 1."""
    error = CompilerError(message="Unexpected token")
    assert error.file_name is None
    assert error.line is None
    assert error.column == 1


@pytest.mark.parametrize(
    "data",
    [
        {"fileName": "a.ts", "message": "boom", "line": 3, "column": 7},
        {"FileName": "a.ts", "Message": "boom", "Line": 3, "Column": 7},
        {"file_name": "a.ts", "message": "boom", "line": 3, "column": 7},
    ],
)
def test_compiler_error_accepts_compiler_key_spellings(data):
    error = CompilerError.model_validate(data)
    assert error.file_name == "a.ts"
    assert error.message == "boom"
    assert error.line == 3
    assert error.column == 7


@pytest.mark.parametrize(
    "data, line, column",
    [
        ({"message": "m", "line": 0, "column": 0}, 1, 1),
        ({"message": "m", "line": -4, "column": 7}, 1, 7),
        ({"message": "m", "line": 3, "column": None}, 3, 1),
        ({"message": "m", "line": None}, None, 1),
    ],
)
def test_compiler_error_unknown_positions_fall_back_to_first(data, line, column):
    """Line and column 0 or null mean the position is unknown, not invalid."""
    error = CompilerError.model_validate(data)
    assert error.line == line
    assert error.column == column


def test_compiler_error_rejects_non_numeric_positions():
    with pytest.raises(ValidationError):
        CompilerError.model_validate({"message": "m", "line": "first"})


def test_compiler_error_requires_message():
    with pytest.raises(ValidationError):
        CompilerError.model_validate({"fileName": "a.ts", "line": 1})


def test_compiler_error_str():
    assert str(CompilerError(file_name="a.ts", message="boom", line=2, column=5)) == "a.ts(2,5): boom"
    assert str(CompilerError(message="boom")) == "boom"


def test_compiler_error_to_dict_round_trips():
    error = CompilerError(file_name="a.ts", message="boom", line=2, column=5)
    assert CompilerError.model_validate(error.to_dict()) == error


# --- Tests for CompilerResult ---


def test_compiler_result_initial_state():
    result = CompilerResult(source_file_name="site.less")
    assert result.source_file_name == "site.less"
    assert result.is_success is False
    assert result.result is None
    assert result.errors is None
    assert not result.has_errors


def test_compiler_result_source_file_name_is_frozen():
    result = CompilerResult(source_file_name="site.less")
    with pytest.raises(ValidationError):
        result.source_file_name = "other.less"


def test_compiler_result_to_dict():
    result = CompilerResult(source_file_name="site.less")
    result.errors = [CompilerError(message="boom", line=1)]
    assert result.has_errors
    assert result.to_dict() == {
        "sourceFileName": "site.less",
        "isSuccess": False,
        "result": None,
        "errors": [{"fileName": None, "message": "boom", "line": 1, "column": 1}],
    }


# --- Tests for ProcessOutcome / DecodeOutcome ---


def test_process_outcome_success():
    assert ProcessOutcome(exit_code=0).success
    assert not ProcessOutcome(exit_code=2).success


def test_process_outcome_rejects_negative_time():
    with pytest.raises(ValueError):
        ProcessOutcome(exit_code=0, execution_time=-1.0)


def test_decode_outcome_constructors():
    decoded = DecodeOutcome.decoded([], "[]")
    assert decoded.ok and decoded.errors == [] and decoded.raw == "[]"

    malformed = DecodeOutcome.malformed("{", "invalid JSON")
    assert not malformed.ok
    assert malformed.errors == []
    assert malformed.reason == "invalid JSON"


# --- Tests for exceptions ---


def test_transpiler_exception_keeps_context():
    error = TranspilerException("bad", error_code="BAD", detail=1)
    assert str(error) == "bad"
    assert error.error_code == "BAD"
    assert error.context == {"detail": 1}


def test_process_start_error_attributes():
    error = ProcessStartError(
        "cannot start", command=["sh"], working_directory="/tmp", error_code="X"
    )
    assert isinstance(error, TranspilerException)
    assert error.command == ["sh"]
    assert error.working_directory == "/tmp"
    assert error.error_code == "X"
