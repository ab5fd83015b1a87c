"""CloudTrail event sources"""

from .archive import archive_lines, read_archive
from .cloudtrail_lookup import CloudTrailLookup, lookup_lines

__all__ = [
    'archive_lines',
    'read_archive',
    'CloudTrailLookup',
    'lookup_lines'
]
