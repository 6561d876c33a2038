"""
S3 object storage implementation.

Fetches recordings and publishes converted audio through the process-wide
S3 client, translating botocore failures into RemoteObjectError.
"""
import logging
import os
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ...core.exceptions import LocalIOError, RemoteObjectError
from ...core.models.conversion_result import PublishedResult
from ...core.ports.storage_service import ObjectStoragePort, PublishContent
from ...infrastructure.aws.aws_config import AWSConfigManager, aws_config_manager
from ...infrastructure.logging.log_decorators import log_operation

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {'NoSuchKey', 'NoSuchBucket', '404', 'NotFound'}


def _object_context(bucket: str, key: str, *args, **kwargs) -> Dict[str, Any]:
    return {"bucket": bucket, "key": key}


class S3ObjectStorage(ObjectStoragePort):
    """
    S3 implementation of the object storage port.

    The client is looked up on the config manager at call time so the
    lazily created, shared client is used.
    """

    def __init__(self, config_manager: Optional[AWSConfigManager] = None):
        """Initialize S3 object storage."""
        self.config_manager = config_manager or aws_config_manager

    @property
    def s3_client(self):
        return self.config_manager.s3_client

    @log_operation("fetch_object", context=_object_context)
    def fetch(self, bucket: str, key: str) -> bytes:
        """
        Download an object's full body from S3.

        Raises:
            RemoteObjectError: If the object doesn't exist, access is denied
                or the transfer fails
        """
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            body = response['Body']
            try:
                data = body.read()
            finally:
                body.close()
        except ClientError as e:
            self.config_manager.log_client_error(e, "fetch", f"{bucket}/{key}")
            raise self._translate_client_error(e, "fetch", bucket, key) from e
        except BotoCoreError as e:
            raise RemoteObjectError(
                f"Transfer of s3://{bucket}/{key} failed: {e}",
                operation="fetch",
                resource=key
            ) from e

        expected = response.get('ContentLength')
        if expected is not None and expected != len(data):
            raise RemoteObjectError(
                f"Incomplete download of s3://{bucket}/{key}: got {len(data)} of {expected} bytes",
                operation="fetch",
                resource=key
            )

        logger.debug("Object fetched", extra={
            "bucket": bucket,
            "key": key,
            "size_bytes": len(data),
            "content_type": response.get('ContentType', 'unknown')
        })
        return data

    @log_operation("publish_object", context=_object_context)
    def publish(
        self,
        bucket: str,
        key: str,
        content: PublishContent,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> PublishedResult:
        """
        Upload bytes or a local file to S3 (unconditional overwrite).

        Raises:
            RemoteObjectError: On authorization or transport failure
            LocalIOError: If the local file cannot be read
        """
        request = {
            'Bucket': bucket,
            'Key': key,
            'ContentType': content_type
        }
        if metadata:
            request['Metadata'] = metadata

        if isinstance(content, (bytes, bytearray)):
            size_bytes = len(content)
            response = self._put_object(request, bytes(content))
        else:
            path = os.fspath(content)
            try:
                size_bytes = os.path.getsize(path)
                with open(path, 'rb') as body:
                    response = self._put_object(request, body)
            except OSError as e:
                raise LocalIOError(
                    f"Cannot read file to publish: {e}",
                    operation="publish",
                    resource=path
                ) from e

        return PublishedResult(
            bucket=bucket,
            key=key,
            content_type=content_type,
            etag=(response.get('ETag') or '').strip('"') or None,
            version_id=response.get('VersionId'),
            size_bytes=size_bytes
        )

    def _put_object(self, request: Dict[str, Any], body) -> Dict[str, Any]:
        bucket, key = request['Bucket'], request['Key']
        try:
            return self.s3_client.put_object(Body=body, **request)
        except ClientError as e:
            self.config_manager.log_client_error(e, "publish", f"{bucket}/{key}")
            raise self._translate_client_error(e, "publish", bucket, key) from e
        except BotoCoreError as e:
            raise RemoteObjectError(
                f"Upload to s3://{bucket}/{key} failed: {e}",
                operation="publish",
                resource=key
            ) from e

    @staticmethod
    def _translate_client_error(error: ClientError, operation: str, bucket: str, key: str) -> RemoteObjectError:
        error_code = error.response.get('Error', {}).get('Code', 'Unknown')
        if error_code in _NOT_FOUND_CODES:
            message = f"Object not found: s3://{bucket}/{key}"
        elif error_code in ('AccessDenied', 'Forbidden', '403'):
            message = f"Access denied to s3://{bucket}/{key}"
        else:
            message = f"S3 {operation} failed for s3://{bucket}/{key}: {error_code}"
        return RemoteObjectError(message, operation=operation, resource=key, error_code=error_code)
