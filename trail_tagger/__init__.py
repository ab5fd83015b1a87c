__version__ = "0.1.0"

from .config import ParseSettings, load_config
from .exceptions import (
    TrailTaggerError,
    ConfigError,
    TimeWindowError,
    TimeFormatError,
    TimeOrderError,
    QueryError,
    TagExtractionError,
    RecordSerializationError,
    ArchiveError,
    EventLookupError
)
from .models import (
    ResourceIdentity,
    StructuredResourceRef,
    TimeWindow,
    TaggingMetadata,
    OutputRecord
)
from .parsing import EventProcessor, JqEvaluator, RecordFilter, TagExtractor, synthesize_arn
from .sources import CloudTrailLookup, archive_lines, lookup_lines

__all__ = [
    '__version__',

    # Configuration
    'ParseSettings',
    'load_config',

    # Errors
    'TrailTaggerError',
    'ConfigError',
    'TimeWindowError',
    'TimeFormatError',
    'TimeOrderError',
    'QueryError',
    'TagExtractionError',
    'RecordSerializationError',
    'ArchiveError',
    'EventLookupError',

    # Data model
    'ResourceIdentity',
    'StructuredResourceRef',
    'TimeWindow',
    'TaggingMetadata',
    'OutputRecord',

    # Pipeline
    'EventProcessor',
    'JqEvaluator',
    'RecordFilter',
    'TagExtractor',
    'synthesize_arn',

    # Sources
    'CloudTrailLookup',
    'archive_lines',
    'lookup_lines'
]
