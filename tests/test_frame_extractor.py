"""ffmpeg command construction and fallback."""

import subprocess

import pytest

from storyhub.errors import FrameExtractionError
from storyhub.services import frame_extractor
from storyhub.services.frame_extractor import PREVIEW_SIZE, THUMBNAIL_SIZE, FfmpegFrameExtractor


class Recorder:
    def __init__(self, failures=0, error=None):
        self.failures = failures
        self.error = error
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        if len(self.commands) <= self.failures:
            raise self.error or subprocess.CalledProcessError(1, command, stderr=b"boom")
        return subprocess.CompletedProcess(command, 0)


def test_scaled_command_first(monkeypatch):
    recorder = Recorder()
    monkeypatch.setattr(frame_extractor.subprocess, "run", recorder)

    FfmpegFrameExtractor("ffmpeg-bin").extract_frame("in.mp4", "00:00:01", "out.jpg", PREVIEW_SIZE)

    (command,) = recorder.commands
    assert command[0] == "ffmpeg-bin"
    assert command[command.index("-ss") + 1] == "00:00:01"
    assert command[command.index("-q:v") + 1] == "2"
    assert "pad=1280:720" in command[command.index("-vf") + 1]
    assert command[-1] == "out.jpg"


def test_thumbnail_quality(monkeypatch):
    recorder = Recorder()
    monkeypatch.setattr(frame_extractor.subprocess, "run", recorder)
    FfmpegFrameExtractor().extract_frame("in.mp4", "00:00:01", "out.jpg", THUMBNAIL_SIZE)
    assert recorder.commands[0][recorder.commands[0].index("-q:v") + 1] == "8"


def test_falls_back_to_plain_command(monkeypatch):
    recorder = Recorder(failures=1)
    monkeypatch.setattr(frame_extractor.subprocess, "run", recorder)

    FfmpegFrameExtractor().extract_frame("in.mp4", "00:00:01", "out.jpg", THUMBNAIL_SIZE)

    assert len(recorder.commands) == 2
    assert "-q:v" not in recorder.commands[1]
    assert recorder.commands[1][recorder.commands[1].index("-vf") + 1] == "scale=320:180"


def test_raises_when_every_attempt_fails(monkeypatch):
    monkeypatch.setattr(frame_extractor.subprocess, "run", Recorder(failures=2))
    with pytest.raises(FrameExtractionError):
        FfmpegFrameExtractor().extract_frame("in.mp4", "00:00:01", "out.jpg", PREVIEW_SIZE)


def test_missing_binary(monkeypatch):
    monkeypatch.setattr(frame_extractor.subprocess, "run", Recorder(failures=1, error=FileNotFoundError("ffmpeg")))
    with pytest.raises(FrameExtractionError):
        FfmpegFrameExtractor().extract_frame("in.mp4", "00:00:01", "out.jpg")
