"""
AWS client configuration for the recording converter.

Provides a process-wide S3 client that is created lazily on first use and
reused by every invocation served by the same Lambda execution environment.
"""
import logging
import threading
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, NoCredentialsError

from ...config.settings import ConverterSettings, converter_settings

logger = logging.getLogger(__name__)


class AWSConfigManager:
    """
    Centralized AWS client management for the Lambda process.

    Client construction is guarded by a lock so concurrent first use from
    several threads still builds a single client.
    """

    def __init__(self, settings: Optional[ConverterSettings] = None):
        """Initialize AWS client manager from converter settings."""
        self.settings = settings or converter_settings
        self._s3_client: Optional[Any] = None
        self._lock = threading.Lock()

        self._boto_config = Config(
            region_name=self.settings.aws_region,
            retries={
                'max_attempts': self.settings.aws_max_retry_attempts,
                'mode': 'adaptive'
            },
            max_pool_connections=self.settings.aws_max_pool_connections
        )

        logger.debug("AWS client manager initialized", extra={
            "region": self.settings.aws_region,
            "max_retries": self.settings.aws_max_retry_attempts,
            "local_s3": self.settings.use_local_s3
        })

    @property
    def s3_client(self):
        """
        Get or create S3 client with proper configuration.

        Raises:
            NoCredentialsError: If AWS credentials are not available
        """
        if self._s3_client is None:
            with self._lock:
                if self._s3_client is None:
                    self._s3_client = self._create_s3_client()
        return self._s3_client

    def _create_s3_client(self):
        kwargs = {
            'service_name': 's3',
            'region_name': self.settings.aws_region,
            'config': self._boto_config
        }
        if self.settings.use_local_s3:
            kwargs['endpoint_url'] = self.settings.s3_endpoint_url

        try:
            client = boto3.client(**kwargs)
        except NoCredentialsError:
            logger.error("AWS credentials not found for S3 client")
            raise
        logger.info("S3 client created", extra={
            "region": self.settings.aws_region,
            "endpoint_url": self.settings.s3_endpoint_url
        })
        return client

    @property
    def has_s3_client(self) -> bool:
        return self._s3_client is not None

    def close(self) -> None:
        """Close the S3 client's connection pool and forget it."""
        with self._lock:
            client, self._s3_client = self._s3_client, None
        if client is not None:
            client.close()
            logger.info("S3 client closed")

    def reset(self) -> None:
        """Drop the cached client without closing it (used by tests)."""
        with self._lock:
            self._s3_client = None

    def log_client_error(self, error: Exception, operation: str, resource: str = "") -> None:
        """
        Log AWS service errors with their error code and request id.

        Args:
            error: The AWS error that occurred
            operation: Description of the operation that failed
            resource: Resource identifier (bucket/key)
        """
        if isinstance(error, ClientError):
            logger.error("AWS ClientError occurred", extra={
                "operation": operation,
                "resource": resource,
                "error_code": error.response.get('Error', {}).get('Code'),
                "error_message": error.response.get('Error', {}).get('Message'),
                "request_id": error.response.get('ResponseMetadata', {}).get('RequestId')
            })
        elif isinstance(error, NoCredentialsError):
            logger.error("AWS credentials not available", extra={
                "operation": operation,
                "resource": resource
            })
        else:
            logger.error("Unexpected AWS error", extra={
                "operation": operation,
                "resource": resource,
                "error": str(error),
                "error_type": type(error).__name__
            })


# Global AWS config manager instance, shared by every invocation of the process
aws_config_manager = AWSConfigManager()
