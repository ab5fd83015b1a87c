"""
Single-event pipeline: identify -> ARN -> tags -> record -> filter
"""
import json
import logging
from typing import Any, Dict, Iterator, Optional

from ..config import ParseSettings
from ..exceptions import RecordSerializationError, TagExtractionError
from ..models import OutputRecord, StructuredResourceRef
from .arn import ArnSynthesizer, synthesize_arn
from .filters import RecordFilter
from .identity import resolve_identities
from .output import build_tagging_metadata, error_line, serialize_record
from .query import QueryEvaluator
from .tags import TagExtractor


logger = logging.getLogger(__name__)


class EventProcessor:
    """
    Turns one raw CloudTrail event into zero or more output lines.

    Lines are yielded in order and are either serialized records that passed
    the filters or inline `{"error": ...}` diagnostics.
    """

    def __init__(self,
                 tag_extractor: Optional[TagExtractor] = None,
                 record_filter: Optional[RecordFilter] = None,
                 include_event: bool = False,
                 arn_synthesizer: ArnSynthesizer = synthesize_arn):
        self.tag_extractor = tag_extractor or TagExtractor()
        self.record_filter = record_filter or RecordFilter()
        self.include_event = include_event
        self.arn_synthesizer = arn_synthesizer

    @classmethod
    def from_settings(cls, settings: ParseSettings,
                      evaluator: Optional[QueryEvaluator] = None,
                      arn_synthesizer: ArnSynthesizer = synthesize_arn) -> 'EventProcessor':
        return cls(
            tag_extractor=TagExtractor(settings.tag_patterns, evaluator),
            record_filter=RecordFilter(settings.filter_patterns, evaluator),
            include_event=settings.include_event,
            arn_synthesizer=arn_synthesizer
        )

    def process(self, event_text: str, envelope: Optional[Dict[str, Any]] = None) -> Iterator[str]:
        """
        Process one event.

        Args:
            event_text: Raw CloudTrail event as JSON text
            envelope: LookupEvents `Event` the text came from, if any
        """
        try:
            event = json.loads(event_text)
        except ValueError as e:
            logger.debug(f"Skipping unparsable event: {e}")
            return
        if not isinstance(event, dict):
            logger.debug("Skipping event that is not a JSON object")
            return

        resources = None
        if envelope is not None:
            resources = [StructuredResourceRef.from_api(r) for r in envelope.get('Resources') or []]

        tags = None
        for resource_type, resource_name in resolve_identities(event, resources):
            resource_arn = self.arn_synthesizer(resource_type, resource_name, event)
            if not resource_arn:
                logger.debug(f"No ARN for {resource_type} {resource_name}; dropping")
                continue

            if tags is None:
                try:
                    tags = self.tag_extractor.extract(event_text)
                except TagExtractionError as e:
                    logger.error(f"Tag extraction failed for event {event.get('eventID', '')}: {e}")
                    yield error_line(str(e))
                    return

            record = OutputRecord(
                tagging_metadata=build_tagging_metadata(resource_type, resource_name, resource_arn, event),
                tags=dict(tags),
                event=self._event_payload(event, envelope)
            )

            try:
                record_text = serialize_record(record)
            except RecordSerializationError as e:
                logger.error(f"Could not serialize record for {resource_arn}: {e}")
                yield error_line(str(e))
                continue

            if self.record_filter.matches(record_text):
                yield record_text

    def _event_payload(self, event: Dict[str, Any], envelope: Optional[Dict[str, Any]]) -> Optional[Any]:
        if not self.include_event:
            return None
        return envelope if envelope is not None else event
