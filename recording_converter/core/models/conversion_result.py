"""
Conversion result domain models.

Describes what happened to each record of a notification batch: the
published object on success, the failing stage and error otherwise.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .object_reference import ObjectReference


class RecordState(Enum):
    """Processing state of a single record."""
    PENDING = "pending"
    FETCHED = "fetched"
    TRANSCODED = "transcoded"
    PUBLISHED = "published"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishedResult:
    """The republished object."""

    bucket: str
    key: str
    content_type: str
    etag: Optional[str] = None
    version_id: Optional[str] = None
    size_bytes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'bucket': self.bucket,
            'key': self.key,
            'content_type': self.content_type,
            'etag': self.etag,
            'version_id': self.version_id,
            'size_bytes': self.size_bytes
        }


@dataclass
class RecordOutcome:
    """Terminal outcome of one record."""

    reference: ObjectReference
    state: RecordState
    published: Optional[PublishedResult] = None
    error: Optional[Exception] = None
    stage: Optional[str] = None
    processing_time_ms: int = 0

    @property
    def success(self) -> bool:
        return self.state is RecordState.PUBLISHED

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'bucket': self.reference.bucket,
            'key': self.reference.key,
            'success': self.success,
            'state': self.state.value,
            'processing_time_ms': self.processing_time_ms
        }
        if self.published is not None:
            result['published'] = self.published.to_dict()
        if self.error is not None:
            result['error'] = str(self.error)
            result['error_type'] = type(self.error).__name__
            result['failed_stage'] = self.stage
        return result


@dataclass
class BatchResult:
    """Aggregate of the record outcomes of one invocation."""

    invocation_id: str
    outcomes: List[RecordOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[RecordOutcome]:
        return [outcome for outcome in self.outcomes if outcome.success]

    @property
    def failed(self) -> List[RecordOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def to_summary(self) -> Dict[str, Any]:
        return {
            'invocation_id': self.invocation_id,
            'processed_files': len(self.succeeded),
            'failed_files': len(self.failed),
            'results': [outcome.to_dict() for outcome in self.succeeded],
            'errors': [outcome.to_dict() for outcome in self.failed]
        }
