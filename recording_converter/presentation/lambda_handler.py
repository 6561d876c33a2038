"""
Lambda handler for converting recordings announced by S3 events.

This module is the invocation boundary: it configures logging, runs the
conversion orchestrator and turns the batch result into a response.
"""
import json
import logging
from typing import Any, Dict

from ..application.dependencies import get_orchestrator
from ..core.exceptions import ConversionError
from ..infrastructure.logging.log_config import configure_logging

logger = logging.getLogger(__name__)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda entry point for S3 recording upload events.

    Args:
        event: AWS Lambda event containing S3 notifications
        context: AWS Lambda context object

    Returns:
        Dict with statusCode 200 when every record converted, 207 when some
        records failed, and a JSON body summarizing the outcomes

    Raises:
        ConversionError: When every selected record failed, when fail-fast
            mode aborts the batch, or when the invocation workspace cannot
            be created
    """
    configure_logging()

    request_id = getattr(context, "aws_request_id", None) if context else None
    logger.info("Lambda function started", extra={
        "function_name": getattr(context, "function_name", "unknown") if context else "unknown",
        "request_id": request_id or "unknown",
        "record_count": len((event or {}).get('Records') or [])
    })

    try:
        batch = get_orchestrator().process_event(event, invocation_id=request_id)
    except ConversionError as e:
        logger.error("Lambda invocation failed", extra={
            "request_id": request_id,
            "error": str(e),
            "error_type": type(e).__name__
        })
        raise

    summary = batch.to_summary()
    if not batch.outcomes:
        summary['message'] = 'No created objects to convert'
    elif batch.failed:
        summary['message'] = 'Recording conversion completed with failures'
    else:
        summary['message'] = 'Recording conversion completed'

    return {
        'statusCode': 200 if not batch.failed else 207,  # 207 = Multi-Status
        'body': json.dumps(summary)
    }
