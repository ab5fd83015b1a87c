"""
Output record assembly and serialization
"""
import json
from datetime import datetime
from typing import Any, Dict

from ..exceptions import RecordSerializationError
from ..models import OutputRecord, TaggingMetadata
from .json_path import get_path


def build_tagging_metadata(resource_type: str, resource_name: str,
                           resource_arn: str, event: Dict[str, Any]) -> TaggingMetadata:
    return TaggingMetadata(
        resource_name=resource_name,
        resource_type=resource_type,
        resource_arn=resource_arn,
        creator_arn=get_path(event, 'userIdentity.arn'),
        creator_name=get_path(event, 'userIdentity.userName')
    )


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(data: Any) -> str:
    return json.dumps(data, separators=(',', ':'), default=_json_default)


def serialize_record(record: OutputRecord) -> str:
    """Render a record as a single line of JSON"""
    try:
        return to_json(record.to_dict())
    except (TypeError, ValueError) as e:
        raise RecordSerializationError(str(e))


def error_line(message: str) -> str:
    return json.dumps({'error': message})
