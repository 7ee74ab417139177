"""
Pytest configuration and fixtures for partialsum tests.
"""

import os
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def make_file(tmp_path):
    """Factory creating a file with the given content under tmp_path."""

    def _make(name: str, content: bytes = b"") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def clean_environment():
    """Clean up partialsum environment variables before and after tests."""
    original_env = {}
    for key in list(os.environ.keys()):
        if key.startswith("PARTIALSUM_"):
            original_env[key] = os.environ[key]
            del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if key.startswith("PARTIALSUM_"):
            del os.environ[key]

    for key, value in original_env.items():
        os.environ[key] = value


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]))

    yield messages

    logger.remove(handler_id)


@pytest.fixture
def captured_output():
    """Writers that record coordinator output instead of printing it."""

    class _Captured:
        def __init__(self):
            self.out: list[str] = []
            self.err: list[str] = []

        def write_out(self, line: str) -> None:
            self.out.append(line)

        def write_err(self, line: str) -> None:
            self.err.append(line)

    return _Captured()
