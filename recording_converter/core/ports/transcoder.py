"""
Transcoder port (interface) for media conversion.
"""
from abc import ABC, abstractmethod
from pathlib import Path

from ..models.conversion_profile import ConversionProfile


class TranscoderPort(ABC):
    """Port (interface) for a synchronous media converter."""

    @abstractmethod
    def convert(self, input_path: Path, output_path: Path, profile: ConversionProfile) -> Path:
        """
        Convert ``input_path`` to ``output_path`` following ``profile``.

        Blocks until the conversion finishes. An existing output file is
        overwritten. The returned path is only handed back once the
        conversion is known to have succeeded.

        Raises:
            TranscodeError: If the conversion fails or the input is unusable
        """
        pass
