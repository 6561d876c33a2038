"""
ffmpeg-based transcoder implementation.

Runs the ffmpeg executable shipped in the Lambda layer as a blocking
subprocess and only trusts the output file once the process has exited
cleanly and produced a non-empty file.
"""
import json
import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.exceptions import TranscodeError
from ...core.models.conversion_profile import ConversionProfile
from ...core.ports.transcoder import TranscoderPort
from ...infrastructure.logging.log_decorators import log_operation

logger = logging.getLogger(__name__)

STDERR_TAIL_LINES = 20


def resolve_executable(configured_path: Optional[str]) -> Optional[str]:
    """
    Resolve an executable from configuration.

    The configured path wins when it points at an executable file; otherwise
    the basename is looked up on PATH.

    Returns:
        Absolute path to the executable, or None if it cannot be found
    """
    if not configured_path:
        return None
    if os.path.isfile(configured_path) and os.access(configured_path, os.X_OK):
        return configured_path
    return shutil.which(os.path.basename(configured_path))


def _stderr_tail(stderr: str) -> str:
    lines = [line for line in (stderr or "").splitlines() if line.strip()]
    return "\n".join(lines[-STDERR_TAIL_LINES:])


def _convert_context(input_path, output_path, profile, *args, **kwargs) -> Dict[str, Any]:
    return {"input_path": str(input_path), "output_path": str(output_path), "container": profile.container}


class FFmpegTranscoder(TranscoderPort):
    """
    Transcoder backed by the ffmpeg/ffprobe executables.

    ``ffprobe`` is optional; without it the audio-stream check is left to
    ffmpeg, which exits non-zero when nothing can be mapped to the output.
    """

    def __init__(self, ffmpeg_path: Optional[str], ffprobe_path: Optional[str] = None):
        """
        Initialize the transcoder.

        Args:
            ffmpeg_path: Resolved ffmpeg executable (None if unavailable)
            ffprobe_path: Resolved ffprobe executable (None to skip probing)
        """
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path

        logger.info("ffmpeg transcoder initialized", extra={
            "ffmpeg_path": ffmpeg_path,
            "ffprobe_path": ffprobe_path
        })

    @classmethod
    def from_settings(cls, settings) -> "FFmpegTranscoder":
        """Build a transcoder from converter settings, resolving executables once."""
        ffmpeg_path = resolve_executable(settings.ffmpeg_path)
        if ffmpeg_path is None:
            logger.warning("ffmpeg executable not found", extra={
                "configured_path": settings.ffmpeg_path
            })
        return cls(ffmpeg_path, resolve_executable(settings.ffprobe_path))

    def build_command(self, input_path: Path, output_path: Path, profile: ConversionProfile) -> List[str]:
        return [
            self.ffmpeg_path,
            "-hide_banner",
            "-nostdin",
            "-y",
            "-i", str(input_path),
            *profile.to_ffmpeg_output_args(),
            str(output_path),
        ]

    @log_operation("transcode", context=_convert_context)
    def convert(self, input_path: Path, output_path: Path, profile: ConversionProfile) -> Path:
        """
        Convert the input file to the profile, overwriting the output.

        Raises:
            TranscodeError: If ffmpeg is missing, the input is unreadable or
                has no audio stream, or ffmpeg fails
        """
        input_path, output_path = Path(input_path), Path(output_path)

        if not self.ffmpeg_path:
            raise TranscodeError("ffmpeg executable is not available", resource=str(input_path))

        if not input_path.is_file() or not os.access(input_path, os.R_OK):
            raise TranscodeError(f"Input file is not readable: {input_path}", resource=str(input_path))

        if self.ffprobe_path:
            self._ensure_audio_stream(input_path)

        # A stale file must never be mistaken for this run's output
        self._discard(output_path)

        command = self.build_command(input_path, output_path, profile)
        logger.debug("Running ffmpeg", extra={"command": " ".join(command)})

        # Input metadata tags are echoed to stderr verbatim and need not be UTF-8
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False
            )
        except OSError as e:
            self._discard(output_path)
            raise TranscodeError(f"Could not start ffmpeg: {e}", resource=str(input_path)) from e

        if completed.returncode != 0:
            self._discard(output_path)
            tail = _stderr_tail(completed.stderr)
            raise TranscodeError(
                f"ffmpeg exited with status {completed.returncode}",
                resource=str(input_path),
                exit_code=completed.returncode,
                stderr_tail=tail
            )

        if not output_path.is_file() or output_path.stat().st_size == 0:
            self._discard(output_path)
            raise TranscodeError(
                "ffmpeg reported success but produced no output",
                resource=str(input_path),
                exit_code=completed.returncode,
                stderr_tail=_stderr_tail(completed.stderr)
            )

        return output_path

    def probe(self, path: Path) -> Dict[str, Any]:
        """
        Describe the streams of a media file with ffprobe.

        Returns:
            Parsed ffprobe JSON (``{"streams": [...]}``)

        Raises:
            TranscodeError: If ffprobe is unavailable or cannot read the file
        """
        if not self.ffprobe_path:
            raise TranscodeError("ffprobe executable is not available", operation="probe", resource=str(path))

        command = [
            self.ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-show_streams",
            str(path),
        ]
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False
            )
        except OSError as e:
            raise TranscodeError(f"Could not start ffprobe: {e}", operation="probe", resource=str(path)) from e

        if completed.returncode != 0:
            raise TranscodeError(
                "ffprobe could not read the input",
                operation="probe",
                resource=str(path),
                exit_code=completed.returncode,
                stderr_tail=_stderr_tail(completed.stderr)
            )

        try:
            return json.loads(completed.stdout or "{}")
        except ValueError as e:
            raise TranscodeError("ffprobe returned malformed output", operation="probe", resource=str(path)) from e

    def _ensure_audio_stream(self, input_path: Path) -> None:
        streams = self.probe(input_path).get("streams", [])
        if not any(stream.get("codec_type") == "audio" for stream in streams):
            raise TranscodeError("Input contains no audio stream", resource=str(input_path))

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise TranscodeError(f"Cannot remove output file: {e}", resource=str(path)) from e
