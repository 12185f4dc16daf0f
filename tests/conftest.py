"""Shared fixtures: files standing in for a terminal's output streams."""

import os

import pytest


class StreamCapture:
    """A file opened for writing whose descriptor is handed to children."""

    def __init__(self, path):
        self.path = path
        self.fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)

    def read(self) -> str:
        return self.path.read_text()

    def close(self) -> None:
        os.close(self.fd)


@pytest.fixture
def stdout_capture(tmp_path):
    capture = StreamCapture(tmp_path / "stdout")
    yield capture
    capture.close()


@pytest.fixture
def stderr_capture(tmp_path):
    capture = StreamCapture(tmp_path / "stderr")
    yield capture
    capture.close()
