"""
Object reference domain model.

Identifies a remote object in the recording bucket that a storage
notification pointed at.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ObjectReference:
    """
    Immutable (bucket, key) pair for a remote object.

    ``size`` and ``event_time`` are informational only and do not take
    part in equality.
    """

    bucket: str
    key: str
    size: Optional[int] = field(default=None, compare=False)
    event_time: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.bucket:
            raise ValueError("Bucket name is required")
        if not self.key:
            raise ValueError("Object key is required")

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"
