"""
Error taxonomy for the recording conversion pipeline.

Adapters translate library errors (botocore, OSError, subprocess) into these
types; the orchestrator wraps them per record in RecordConversionError.
"""
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.conversion_result import BatchResult
    from .models.object_reference import ObjectReference


class ConversionError(Exception):
    """Base class for every failure raised by the converter."""

    def __init__(self, message: str, operation: str = None, resource: str = None):
        """
        Initialize conversion error.

        Args:
            message: Error description
            operation: Operation that failed (fetch, publish, transcode, mkdir, ...)
            resource: Object key or local path involved in the operation
        """
        super().__init__(message)
        self.operation = operation
        self.resource = resource

    def __str__(self):
        parts = [super().__str__()]
        if self.operation:
            parts.append(f"Operation: {self.operation}")
        if self.resource:
            parts.append(f"Resource: {self.resource}")
        return " | ".join(parts)


class RemoteObjectError(ConversionError):
    """Object storage fetch/publish failure (not found, access denied, transport)."""

    def __init__(self, message: str, operation: str = None, resource: str = None,
                 error_code: Optional[str] = None):
        super().__init__(message, operation, resource)
        self.error_code = error_code


class TranscodeError(ConversionError):
    """External transcoder failure or malformed/unsupported input."""

    def __init__(self, message: str, operation: str = "transcode", resource: str = None,
                 exit_code: Optional[int] = None, stderr_tail: str = ""):
        super().__init__(message, operation, resource)
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail


class LocalIOError(ConversionError):
    """Filesystem failure in the execution environment."""


class RecordConversionError(ConversionError):
    """
    A single record failed somewhere in the pipeline.

    The original error is chained as ``__cause__``; ``stage`` names the last
    state the record reached before failing.
    """

    def __init__(self, reference: "ObjectReference", stage: str, cause: Exception):
        super().__init__(
            f"Conversion of s3://{reference.bucket}/{reference.key} failed: {cause}",
            operation=stage,
            resource=reference.key
        )
        self.reference = reference
        self.stage = stage
        self.cause = cause


class BatchConversionError(ConversionError):
    """
    Every selected record of a batch failed.

    Raised after the whole batch was attempted so the invocation fails and
    the trigger's retry or dead-letter policy applies. ``batch`` holds the
    per-record outcomes.
    """

    def __init__(self, batch: "BatchResult"):
        failed = batch.failed
        super().__init__(
            f"All {len(failed)} records in the batch failed",
            operation="convert_batch",
            resource=", ".join(outcome.reference.key for outcome in failed)
        )
        self.batch = batch
