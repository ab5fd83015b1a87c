"""Utility modules for AWS sessions and logging"""

from .aws import AWSHelper
from .logging_config import JsonLogFormatter, setup_logging

__all__ = [
    'AWSHelper',
    'setup_logging',
    'JsonLogFormatter'
]
