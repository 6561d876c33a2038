"""
Convert recording use case.

Takes one object reference through fetch, transcode and publish, tracking
the state the record reached so a failure can be reported against it.
"""
import logging
import time
from typing import Optional

from ..exceptions import RecordConversionError
from ..models.conversion_profile import ConversionProfile, MP3_VOICE_PROFILE
from ..models.conversion_result import RecordOutcome, RecordState
from ..models.object_reference import ObjectReference
from ..ports.storage_service import ObjectStoragePort
from ..ports.transcoder import TranscoderPort
from ..services.output_keys import OutputKeyGenerator

logger = logging.getLogger(__name__)


class ConvertRecordingUseCase:
    """
    Fetch → transcode → publish for a single recording.

    The published object lands in the bucket the recording was read from.
    """

    def __init__(
        self,
        storage: ObjectStoragePort,
        transcoder: TranscoderPort,
        key_generator: OutputKeyGenerator,
        content_type: str = "audio/mpeg",
        profile: ConversionProfile = MP3_VOICE_PROFILE
    ):
        self.storage = storage
        self.transcoder = transcoder
        self.key_generator = key_generator
        self.content_type = content_type
        self.profile = profile

    def execute(self, reference: ObjectReference, workspace) -> RecordOutcome:
        """
        Convert one recording.

        Args:
            reference: Object to convert
            workspace: InvocationWorkspace providing local paths

        Returns:
            RecordOutcome in the PUBLISHED state

        Raises:
            RecordConversionError: Wrapping the first failure, with the state
                the record had reached
        """
        start_time = time.perf_counter()
        state = RecordState.PENDING

        logger.info("Starting recording conversion", extra={
            "bucket": reference.bucket,
            "key": reference.key,
            "event_size": reference.size
        })

        try:
            item = workspace.work_item_for(reference.key)

            data = self.storage.fetch(reference.bucket, reference.key)
            workspace.write_input(item, data)
            state = RecordState.FETCHED

            output_path = self.transcoder.convert(item.input_path, item.output_path, self.profile)
            state = RecordState.TRANSCODED

            published = self.storage.publish(
                reference.bucket,
                self.key_generator.next_key(reference),
                output_path,
                self.content_type,
                metadata={
                    'source-bucket': reference.bucket,
                    'source-key': reference.key
                }
            )
            state = RecordState.PUBLISHED

        except Exception as e:
            raise RecordConversionError(reference, state.value, e) from e

        processing_time_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info("Recording conversion completed", extra={
            "bucket": reference.bucket,
            "key": reference.key,
            "published_key": published.key,
            "size_bytes": published.size_bytes,
            "processing_time_ms": processing_time_ms
        })

        return RecordOutcome(
            reference=reference,
            state=state,
            published=published,
            processing_time_ms=processing_time_ms
        )


def failed_outcome(error: RecordConversionError, processing_time_ms: Optional[int] = 0) -> RecordOutcome:
    """Build the FAILED outcome for a wrapped record error."""
    return RecordOutcome(
        reference=error.reference,
        state=RecordState.FAILED,
        error=error.cause,
        stage=error.stage,
        processing_time_ms=processing_time_ms or 0
    )
