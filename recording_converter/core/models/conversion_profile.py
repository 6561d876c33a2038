"""
Conversion profile domain model.

The output profile is fixed: every recording is published as mono MP3 at
48 kHz and 32768 bps with any video stream dropped.
"""
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ConversionProfile:
    """Output characteristics handed to the transcoder."""

    container: str
    codec: str
    channels: int
    sample_rate_hz: int
    bitrate_bps: int
    video_disabled: bool = True

    def to_ffmpeg_output_args(self) -> List[str]:
        """
        Render the profile as ffmpeg output options.

        Returns:
            Arguments to place between the input and the output path
        """
        args = []
        if self.video_disabled:
            args.append("-vn")
        args.extend([
            "-ac", str(self.channels),
            "-ar", str(self.sample_rate_hz),
            "-b:a", str(self.bitrate_bps),
            "-c:a", self.codec,
            "-f", self.container,
        ])
        return args


MP3_VOICE_PROFILE = ConversionProfile(
    container="mp3",
    codec="libmp3lame",
    channels=1,
    sample_rate_hz=48_000,
    bitrate_bps=32768,
    video_disabled=True
)
