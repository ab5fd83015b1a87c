"""
jq evaluation for tag and filter patterns
"""
import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, List

import jq

from ..exceptions import QueryError


logger = logging.getLogger(__name__)


class QueryEvaluator(ABC):
    """Evaluates a pattern against a JSON document given as text"""

    @abstractmethod
    def evaluate(self, document: str, pattern: str) -> List[Any]:
        """Return every result of the pattern, raising QueryError on failure"""


@functools.lru_cache(maxsize=256)
def _compile(pattern: str):
    return jq.compile(pattern)


class JqEvaluator(QueryEvaluator):
    """QueryEvaluator backed by the jq library"""

    def evaluate(self, document: str, pattern: str) -> List[Any]:
        try:
            program = _compile(pattern)
        except ValueError as e:
            raise QueryError(pattern, f"compile error: {e}")

        try:
            return program.input_text(document).all()
        except ValueError as e:
            raise QueryError(pattern, str(e))
