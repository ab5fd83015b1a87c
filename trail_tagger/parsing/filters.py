"""
Boolean jq filters applied to assembled output records
"""
import logging
from typing import List, Optional

from ..exceptions import QueryError
from .query import JqEvaluator, QueryEvaluator


logger = logging.getLogger(__name__)


class RecordFilter:
    """Conjunction of jq patterns; each must yield literal `true`"""

    def __init__(self, patterns: Optional[List[str]] = None, evaluator: Optional[QueryEvaluator] = None):
        self.patterns = list(patterns or [])
        self.evaluator = evaluator or JqEvaluator()

    def matches(self, record_text: str) -> bool:
        for pattern in self.patterns:
            try:
                results = self.evaluator.evaluate(record_text, pattern)
            except QueryError as e:
                logger.debug(f"Filter {pattern!r} failed, rejecting record: {e}")
                return False

            # 1 == True in Python, so compare identity
            if not results or results[0] is not True:
                return False

        return True
