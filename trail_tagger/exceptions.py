"""
Exceptions raised by trail-tagger
"""


class TrailTaggerError(Exception):
    """Base class for all trail-tagger errors"""


class ConfigError(TrailTaggerError):
    """Configuration file could not be loaded or has invalid values"""


class TimeWindowError(TrailTaggerError):
    """Lookup time window could not be computed"""


class TimeFormatError(TimeWindowError):
    """A window bound is not a valid RFC3339 timestamp"""


class TimeOrderError(TimeWindowError):
    """Window start is at or after window end"""


class QueryError(TrailTaggerError):
    """A jq pattern failed to compile or evaluate"""

    def __init__(self, pattern: str, message: str):
        super().__init__(f"{pattern}: {message}")
        self.pattern = pattern


class TagExtractionError(TrailTaggerError):
    """A tag pattern failed while extracting tags from an event"""


class RecordSerializationError(TrailTaggerError):
    """An output record could not be rendered as JSON"""


class ArchiveError(TrailTaggerError):
    """A CloudTrail archive file could not be read or parsed"""


class EventLookupError(TrailTaggerError):
    """A LookupEvents page could not be fetched"""
