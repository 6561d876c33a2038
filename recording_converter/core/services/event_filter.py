"""
Storage notification filtering.

Selects the records of an S3 notification batch that announce an object
written with PUT and turns them into ObjectReferences. Every other event
type is dropped without being treated as an error.
"""
import logging
from typing import Any, Dict, Iterator, Optional
from urllib.parse import unquote_plus

from ..models.object_reference import ObjectReference

logger = logging.getLogger(__name__)

OBJECT_CREATED_PUT = "ObjectCreated:Put"


def select_created_objects(event: Optional[Dict[str, Any]]) -> Iterator[ObjectReference]:
    """
    Lazily yield references for every ``ObjectCreated:Put`` record, in order.

    Args:
        event: Lambda event payload (``{"Records": [...]}``)

    Yields:
        ObjectReference with the URL-decoded object key
    """
    records = (event or {}).get('Records') or []

    for index, record in enumerate(records):
        event_name = (record or {}).get('eventName')
        if event_name != OBJECT_CREATED_PUT:
            logger.debug("Ignoring notification record", extra={
                "record_index": index,
                "event_name": event_name
            })
            continue

        reference = _parse_reference(record)
        if reference is None:
            logger.warning("Skipping malformed notification record", extra={
                "record_index": index,
                "event_name": event_name
            })
            continue

        yield reference


def _parse_reference(record: Dict[str, Any]) -> Optional[ObjectReference]:
    try:
        s3_info = record['s3']
        bucket = s3_info['bucket']['name']
        object_info = s3_info['object']
        # S3 URL-encodes keys in notifications (spaces arrive as '+')
        key = unquote_plus(object_info['key'])
        return ObjectReference(
            bucket=bucket,
            key=key,
            size=object_info.get('size'),
            event_time=record.get('eventTime')
        )
    except (KeyError, TypeError, ValueError):
        return None
