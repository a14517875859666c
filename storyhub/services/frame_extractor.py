"""Still-frame extraction from uploaded videos via the ffmpeg binary."""

import logging
import subprocess
from typing import List, Optional, Protocol, Tuple

from storyhub.errors import FrameExtractionError

logger = logging.getLogger(__name__)

PREVIEW_SIZE = (1280, 720)
THUMBNAIL_SIZE = (320, 180)


class FrameExtractor(Protocol):
    def extract_frame(
        self,
        video_path: str,
        timestamp: str,
        output_path: str,
        size: Optional[Tuple[int, int]] = None,
    ) -> None:
        ...


class FfmpegFrameExtractor:
    def __init__(self, binary: str = "ffmpeg", timeout_seconds: float = 60.0):
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def _scaled_command(self, video_path, timestamp, output_path, size) -> List[str]:
        width, height = size
        quality = "2" if width >= PREVIEW_SIZE[0] else "8"
        scale = (
            f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
            f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2:black"
        )
        return [
            self.binary, "-y", "-ss", timestamp, "-i", video_path,
            "-vframes", "1", "-q:v", quality, "-vf", scale, output_path,
        ]

    def _plain_command(self, video_path, timestamp, output_path, size) -> List[str]:
        command = [self.binary, "-y", "-ss", timestamp, "-i", video_path, "-vframes", "1"]
        if size:
            command += ["-vf", f"scale={size[0]}:{size[1]}"]
        return command + [output_path]

    def _run(self, command: List[str]) -> None:
        subprocess.run(
            command,
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            timeout=self.timeout_seconds,
        )

    def extract_frame(self, video_path, timestamp, output_path, size=None) -> None:
        attempts = []
        if size:
            attempts.append(self._scaled_command(video_path, timestamp, output_path, size))
        attempts.append(self._plain_command(video_path, timestamp, output_path, size))

        last_error: Exception | None = None
        for command in attempts:
            try:
                self._run(command)
                return
            except subprocess.CalledProcessError as exc:
                stderr = (exc.stderr or b"").decode("utf-8", "replace")[-500:]
                logger.warning("ffmpeg exited with %s: %s", exc.returncode, stderr)
                last_error = exc
            except (OSError, subprocess.TimeoutExpired) as exc:
                logger.warning("ffmpeg could not run: %s", exc)
                last_error = exc
        raise FrameExtractionError(f"Failed to extract frame from {video_path}") from last_error
