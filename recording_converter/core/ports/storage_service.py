"""
Object storage port (interface) for recording fetch and publish operations.
"""
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from ..models.conversion_result import PublishedResult

PublishContent = Union[bytes, str, "os.PathLike[str]"]


class ObjectStoragePort(ABC):
    """
    Port (interface) for bucket+key addressed object storage.

    Implementations hold no per-call state and may be shared across
    invocations.
    """

    @abstractmethod
    def fetch(self, bucket: str, key: str) -> bytes:
        """
        Retrieve the full body of an object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Object content as bytes

        Raises:
            RemoteObjectError: If the object is missing, inaccessible or the
                transfer is interrupted
        """
        pass

    @abstractmethod
    def publish(
        self,
        bucket: str,
        key: str,
        content: PublishContent,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> PublishedResult:
        """
        Upload content under the given key, creating or overwriting it.

        Args:
            bucket: Bucket name
            key: Destination object key
            content: Raw bytes or a path to a local file
            content_type: MIME type stored with the object
            metadata: Optional user metadata stored with the object

        Returns:
            PublishedResult confirming the write

        Raises:
            RemoteObjectError: On authorization or transport failure
            LocalIOError: If a local file cannot be read
        """
        pass
