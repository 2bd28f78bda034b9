import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from .config import (
    DEFAULT_DISALLOWED_PARENT_EXTENSIONS,
    DEFAULT_RESOURCE_DIRECTORY,
    ENV_RESOURCES,
    ENV_RUNTIME,
    ExecutorSettings,
)
from .core_types import InvalidConfigurationError


def test_defaults():
    settings = ExecutorSettings(runtime_path=sys.executable)
    assert settings.disallowed_parent_extensions == DEFAULT_DISALLOWED_PARENT_EXTENSIONS
    assert settings.resource_directory == DEFAULT_RESOURCE_DIRECTORY
    assert settings.register_generated_files is True
    assert settings.temp_directory is None
    assert settings.timeout is None


def test_unknown_runtime_is_kept_as_given():
    settings = ExecutorSettings(runtime_path="surely-not-a-real-runtime-xyz")
    assert settings.runtime_path == "surely-not-a-real-runtime-xyz"


def test_empty_runtime_rejected():
    with pytest.raises(ValidationError):
        ExecutorSettings(runtime_path="")


def test_extensions_are_normalized():
    settings = ExecutorSettings(
        runtime_path=sys.executable, disallowed_parent_extensions=("PNG", ".Svg", " ")
    )
    assert settings.disallowed_parent_extensions == (".png", ".svg")


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        ExecutorSettings(runtime_path=sys.executable, timeout=0)


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        ExecutorSettings(runtime_path=sys.executable, in_unit_tests=True)


def test_resolve_script(tmp_path):
    settings = ExecutorSettings(runtime_path=sys.executable, resource_directory=tmp_path)
    assert settings.resolve_script("less/lessc.js") == tmp_path / "less" / "lessc.js"
    absolute = (tmp_path / "elsewhere.js").resolve()
    assert settings.resolve_script(absolute) == absolute


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_RUNTIME, sys.executable)
    monkeypatch.setenv(ENV_RESOURCES, str(tmp_path))

    settings = ExecutorSettings.from_env(register_generated_files=False)

    assert settings.runtime_path == sys.executable
    assert settings.resource_directory == tmp_path
    assert settings.register_generated_files is False


def test_load_from_json(tmp_path):
    config_file = tmp_path / "settings.json"
    config_file.write_text(
        json.dumps(
            {
                "runtime_path": sys.executable,
                "disallowed_parent_extensions": [".bmp"],
                "register_generated_files": False,
                "timeout": 30,
            }
        )
    )

    settings = ExecutorSettings.load(config_file)

    assert settings.disallowed_parent_extensions == (".bmp",)
    assert settings.register_generated_files is False
    assert settings.timeout == 30


@pytest.mark.parametrize(
    "content, error_code",
    [
        ("{not json", "INVALID_JSON"),
        ('{"timeout": -1}', "INVALID_CONFIGURATION"),
        ('{"unknown": 1}', "INVALID_CONFIGURATION"),
    ],
)
def test_load_invalid_files(tmp_path, content, error_code):
    config_file = tmp_path / "settings.json"
    config_file.write_text(content)

    with pytest.raises(InvalidConfigurationError) as exc_info:
        ExecutorSettings.load(config_file)
    assert exc_info.value.error_code == error_code


def test_load_missing_file(tmp_path):
    with pytest.raises(InvalidConfigurationError) as exc_info:
        ExecutorSettings.load(Path(tmp_path / "missing.json"))
    assert exc_info.value.error_code == "FILE_NOT_FOUND"
