"""
Conversion orchestrator for a notification batch.

Filters the batch, opens the invocation workspace and runs the convert
recording use case for each selected record in order.
"""
import logging
import time
from typing import Any, Dict, Optional

from ..core.exceptions import BatchConversionError, RecordConversionError
from ..core.models.conversion_result import BatchResult
from ..core.services.event_filter import select_created_objects
from ..core.usecases.convert_recording import ConvertRecordingUseCase, failed_outcome
from ..infrastructure.workspace import invocation_workspace

logger = logging.getLogger(__name__)


class ConversionOrchestrator:
    """
    Orchestrates the conversion of every created object in a batch.

    By default each record is processed independently and failures are
    collected into the BatchResult; only a batch in which every selected
    record failed is raised. With ``fail_fast`` the first failure aborts the
    remaining records and is raised to the caller.
    """

    def __init__(self, use_case: ConvertRecordingUseCase, workspace_root: str, fail_fast: bool = False):
        self.use_case = use_case
        self.workspace_root = workspace_root
        self.fail_fast = fail_fast

    def process_event(self, event: Dict[str, Any], invocation_id: Optional[str] = None) -> BatchResult:
        """
        Process a Lambda notification batch.

        Args:
            event: S3 notification payload
            invocation_id: Lambda request id used to name the workspace

        Returns:
            BatchResult with one outcome per selected record

        Raises:
            RecordConversionError: First record failure when fail_fast is set
            BatchConversionError: If records were selected and every one failed
            LocalIOError: If the invocation workspace cannot be created
        """
        batch = BatchResult(invocation_id=invocation_id or "")

        with invocation_workspace(self.workspace_root, invocation_id) as workspace:
            for reference in select_created_objects(event):
                start_time = time.perf_counter()
                try:
                    batch.outcomes.append(self.use_case.execute(reference, workspace))
                except RecordConversionError as e:
                    logger.error("Recording conversion failed", extra={
                        "bucket": reference.bucket,
                        "key": reference.key,
                        "failed_stage": e.stage,
                        "error": str(e.cause),
                        "error_type": type(e.cause).__name__
                    })
                    if self.fail_fast:
                        raise
                    batch.outcomes.append(
                        failed_outcome(e, int((time.perf_counter() - start_time) * 1000))
                    )

        logger.info("Notification batch processed", extra={
            "invocation_id": batch.invocation_id,
            "converted": len(batch.succeeded),
            "failed": len(batch.failed)
        })

        if batch.failed and not batch.succeeded:
            raise BatchConversionError(batch)
        return batch
