"""Event-to-tagged-record pipeline"""

from .arn import synthesize_arn
from .filters import RecordFilter
from .identity import RESOURCE_IDENTITY_TABLE, resolve_identities
from .pipeline import EventProcessor
from .query import JqEvaluator, QueryEvaluator
from .tags import TagExtractor
from .time_window import resolve_time_window, window_from_hours, window_from_timestamps

__all__ = [
    'synthesize_arn',
    'RecordFilter',
    'RESOURCE_IDENTITY_TABLE',
    'resolve_identities',
    'EventProcessor',
    'JqEvaluator',
    'QueryEvaluator',
    'TagExtractor',
    'resolve_time_window',
    'window_from_hours',
    'window_from_timestamps'
]
