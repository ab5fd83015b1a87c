"""
Logging setup for the trail-tagger CLI

stdout carries the output records, so log handlers only ever write to stderr
or to a file. Third-party libraries log at WARNING and above through the root
logger; `trail_tagger` loggers use the requested level.
"""
import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import colorlog

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}

DETAILED_FORMAT = '%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s'


class JsonLogFormatter(logging.Formatter):
    """Render each log record as one JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _formatter(log_format: str, color: bool) -> Dict[str, Any]:
    if log_format == 'json':
        return {'()': JsonLogFormatter}
    if log_format == 'detailed':
        return {'format': DETAILED_FORMAT}
    return {
        '()': colorlog.ColoredFormatter,
        'fmt': '%(log_color)s%(levelname)-8s%(reset)s %(message)s',
        'log_colors': LOG_COLORS,
        'no_color': not color,
    }


def setup_logging(log_level: str = 'WARNING',
                  log_file: Optional[str] = None,
                  log_format: str = 'console',
                  enable_color: bool = True) -> None:
    """
    Configure logging for a CLI run

    Args:
        log_level: Level for trail_tagger loggers (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file that receives the same records as stderr
        log_format: 'console' (colorlog), 'json' or 'detailed'
        enable_color: Color console output when stderr is a terminal
    """
    color = enable_color and sys.stderr.isatty()
    handlers = {
        'stderr': {
            'class': 'logging.StreamHandler',
            'formatter': 'stderr',
            'stream': 'ext://sys.stderr',
        }
    }
    formatters = {'stderr': _formatter(log_format, color)}

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        formatters['file'] = _formatter('json' if log_format == 'json' else 'detailed', False)
        handlers['file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'file',
            'filename': log_file,
            'encoding': 'utf-8',
            'delay': True,
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': handlers,
        'loggers': {
            'trail_tagger': {'level': log_level.upper()},
        },
        'root': {
            'level': 'WARNING',
            'handlers': list(handlers),
        },
    })
