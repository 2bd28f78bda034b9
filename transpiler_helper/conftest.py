import sys
import textwrap
from pathlib import Path

import pytest
from loguru import logger

from .config import ExecutorSettings
from .hooks import RecordingProjectHooks


@pytest.fixture
def log_messages():
    """Collect every loguru message emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def temp_dir(tmp_path):
    """Directory that receives the captured diagnostic files."""
    path = tmp_path / "captured"
    path.mkdir()
    return path


@pytest.fixture
def settings(temp_dir):
    """Settings that run compiler scripts with the current interpreter."""
    return ExecutorSettings(runtime_path=sys.executable, temp_directory=temp_dir)


@pytest.fixture
def recording_hooks():
    return RecordingProjectHooks()


@pytest.fixture
def write_script(tmp_path):
    """Write a compiler script into a scripts directory and return its path."""
    scripts_dir = tmp_path / "scripts"
    scripts_dir.mkdir()

    def _write(name: str, body: str) -> Path:
        script = scripts_dir / name
        script.write_text(textwrap.dedent(body), encoding="utf-8")
        return script

    return _write


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "src"
    path.mkdir()
    return path
