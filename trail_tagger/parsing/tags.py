"""
Tag extraction from raw CloudTrail events

Each configured jq pattern is evaluated against the event text. Every result
that is a JSON object contributes its keys to the tag set; later patterns
overwrite earlier ones.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from ..exceptions import QueryError, TagExtractionError
from .query import JqEvaluator, QueryEvaluator


logger = logging.getLogger(__name__)


def coerce_tag_value(value: Any) -> str:
    """
    Tag value as a string.

    null -> '', strings verbatim, anything else compact JSON with sorted keys.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), sort_keys=True)


class TagExtractor:
    def __init__(self, patterns: Optional[List[str]] = None, evaluator: Optional[QueryEvaluator] = None):
        self.patterns = list(patterns or [])
        self.evaluator = evaluator or JqEvaluator()

    def extract(self, event_text: str) -> Dict[str, str]:
        """
        Merge the tags yielded by every pattern.

        Raises TagExtractionError if any pattern fails to evaluate.
        """
        tags = {}
        for pattern in self.patterns:
            try:
                results = self.evaluator.evaluate(event_text, pattern)
            except QueryError as e:
                raise TagExtractionError(str(e))

            for result in results:
                if not isinstance(result, dict):
                    logger.debug(f"Tag pattern {pattern!r} produced a non-object result; skipping the rest")
                    break
                for key, value in result.items():
                    tags[key] = coerce_tag_value(value)

        return tags
