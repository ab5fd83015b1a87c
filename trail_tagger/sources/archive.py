"""
Archive event source: CloudTrail log files as delivered to S3

A log file is a JSON object whose `Records` field lists raw events. Files
ending in `.gz` are read as gzip.
"""
import gzip
import json
import logging
import zlib
from typing import Any, Iterator, List

from ..exceptions import ArchiveError
from ..parsing.pipeline import EventProcessor


logger = logging.getLogger(__name__)


def read_archive(path: str) -> List[Any]:
    """Read and parse a CloudTrail log file, returning its records"""
    opener = gzip.open if path.endswith('.gz') else open

    try:
        with opener(path, 'rt', encoding='utf-8') as f:
            log_file = json.load(f)
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
        raise ArchiveError(f"Cannot read {path}: {e}")
    except ValueError as e:
        raise ArchiveError(f"Cannot parse {path}: {e}")

    if not isinstance(log_file, dict):
        raise ArchiveError(f"{path} is not a CloudTrail log file: top level is not an object")

    records = log_file.get('Records')
    if records is None:
        return []
    if not isinstance(records, list):
        raise ArchiveError(f"{path} is not a CloudTrail log file: 'Records' is not a list")

    logger.info(f"Read {len(records)} records from {path}")
    return records


def archive_lines(path: str, processor: EventProcessor) -> Iterator[str]:
    """Yield output lines for every record in an archive, in file order"""
    for index, record in enumerate(read_archive(path)):
        try:
            event_text = json.dumps(record)
        except (TypeError, ValueError) as e:
            logger.debug(f"Skipping record {index} of {path}: {e}")
            continue

        yield from processor.process(event_text)
