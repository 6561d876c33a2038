"""
Dependency Injection Configuration for the recording converter.

Builds the storage adapter, transcoder, key generator, use case and
orchestrator once per Lambda process and hands out the cached instances.
"""
import logging
from typing import Optional

from ..adapters.storage.s3_object_storage import S3ObjectStorage
from ..adapters.transcoding.ffmpeg_transcoder import FFmpegTranscoder
from ..config.settings import ConverterSettings, converter_settings
from ..core.ports.storage_service import ObjectStoragePort
from ..core.ports.transcoder import TranscoderPort
from ..core.services.output_keys import OutputKeyGenerator
from ..core.usecases.convert_recording import ConvertRecordingUseCase
from ..infrastructure.aws.aws_config import aws_config_manager
from .conversion_orchestrator import ConversionOrchestrator

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container for the recording converter.

    Manages the creation and lifecycle of all dependencies needed by the
    Lambda handler.
    """

    def __init__(self, settings: Optional[ConverterSettings] = None):
        """Initialize the dependency container."""
        self.settings = settings or converter_settings
        self._storage_service: Optional[ObjectStoragePort] = None
        self._transcoder: Optional[TranscoderPort] = None
        self._key_generator: Optional[OutputKeyGenerator] = None
        self._use_case: Optional[ConvertRecordingUseCase] = None
        self._orchestrator: Optional[ConversionOrchestrator] = None

    def get_storage_service(self) -> ObjectStoragePort:
        """Get storage service implementation (singleton)."""
        if self._storage_service is None:
            self._storage_service = S3ObjectStorage(aws_config_manager)
            logger.debug("Storage service created")
        return self._storage_service

    def get_transcoder(self) -> TranscoderPort:
        """Get transcoder implementation (singleton)."""
        if self._transcoder is None:
            self._transcoder = FFmpegTranscoder.from_settings(self.settings)
        return self._transcoder

    def get_key_generator(self) -> OutputKeyGenerator:
        if self._key_generator is None:
            self._key_generator = OutputKeyGenerator(
                prefix=self.settings.output_prefix,
                strategy=self.settings.output_key_strategy
            )
        return self._key_generator

    def get_convert_recording_use_case(self) -> ConvertRecordingUseCase:
        if self._use_case is None:
            self._use_case = ConvertRecordingUseCase(
                storage=self.get_storage_service(),
                transcoder=self.get_transcoder(),
                key_generator=self.get_key_generator(),
                content_type=self.settings.output_content_type
            )
        return self._use_case

    def get_orchestrator(self) -> ConversionOrchestrator:
        """Get conversion orchestrator (singleton)."""
        if self._orchestrator is None:
            self._orchestrator = ConversionOrchestrator(
                use_case=self.get_convert_recording_use_case(),
                workspace_root=self.settings.workspace_root,
                fail_fast=self.settings.fail_fast
            )
            logger.info("Conversion orchestrator created", extra={
                "workspace_root": self.settings.workspace_root,
                "output_prefix": self.settings.output_prefix,
                "output_key_strategy": self.settings.output_key_strategy,
                "fail_fast": self.settings.fail_fast
            })
        return self._orchestrator

    def reset(self) -> None:
        """Reset all cached dependencies (useful for testing)."""
        self._storage_service = None
        self._transcoder = None
        self._key_generator = None
        self._use_case = None
        self._orchestrator = None


# Global dependency container instance
_container = DependencyContainer()


def get_container() -> DependencyContainer:
    """Get the global dependency container."""
    return _container


def get_orchestrator() -> ConversionOrchestrator:
    """Get conversion orchestrator from the global container."""
    return _container.get_orchestrator()


def reset_dependencies() -> None:
    """Reset all dependencies in the global container."""
    _container.reset()
