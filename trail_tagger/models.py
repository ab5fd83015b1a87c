from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from datetime import datetime

from .exceptions import TimeOrderError


@dataclass(frozen=True)
class ResourceIdentity:
    """Where to find the created resource in a raw event of a given name"""
    resource_type: str
    resource_name_path: str


@dataclass(frozen=True)
class StructuredResourceRef:
    """Resource entry attached to a LookupEvents event"""
    resource_name: str
    resource_type: str

    @classmethod
    def from_api(cls, resource: Dict[str, Any]) -> 'StructuredResourceRef':
        return cls(
            resource_name=resource.get('ResourceName') or '',
            resource_type=resource.get('ResourceType') or ''
        )

    @property
    def usable(self) -> bool:
        return bool(self.resource_name and self.resource_type)


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise TimeOrderError(
                f"window start ({self.start.isoformat()}) is at or after window end ({self.end.isoformat()})"
            )


@dataclass(frozen=True)
class TaggingMetadata:
    resource_name: str
    resource_type: str
    resource_arn: str
    creator_arn: str
    creator_name: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'ResourceName': self.resource_name,
            'ResourceType': self.resource_type,
            'ResourceARN': self.resource_arn,
            'CreatorARN': self.creator_arn,
            'CreatorName': self.creator_name
        }


@dataclass
class OutputRecord:
    """One output line. `event` is only set when events are included."""
    tagging_metadata: TaggingMetadata
    tags: Dict[str, str] = field(default_factory=dict)
    event: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        if self.event is not None:
            data['Event'] = self.event
        data['TaggingMetadata'] = self.tagging_metadata.to_dict()
        data['Tags'] = self.tags
        return data
