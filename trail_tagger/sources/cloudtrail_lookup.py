"""
Live event source: CloudTrail LookupEvents

One request is issued per configured resource type (or a single unfiltered
request), each bounded by the resolved time window. Pages are fetched lazily
and every event is run through the EventProcessor before the next page is
requested.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..config import ParseSettings
from ..exceptions import EventLookupError, TimeWindowError
from ..models import TimeWindow
from ..parsing.output import error_line
from ..parsing.pipeline import EventProcessor
from ..parsing.time_window import resolve_time_window


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class CloudTrailLookup:
    def __init__(self,
                 client,
                 processor: EventProcessor,
                 resource_types: Optional[List[str]] = None,
                 page_size: int = DEFAULT_PAGE_SIZE):
        """
        Args:
            client: Boto3 CloudTrail client
            processor: Pipeline each returned event is fed through
            resource_types: LookupEvents ResourceType facets; empty means unfiltered
            page_size: Maximum events per page
        """
        self.client = client
        self.processor = processor
        self.resource_types = list(resource_types or [])
        self.page_size = page_size

    def build_requests(self, window: TimeWindow) -> List[Dict[str, Any]]:
        """One LookupEvents request per resource type facet"""
        base = {
            'StartTime': window.start,
            'EndTime': window.end,
            'PaginationConfig': {'PageSize': self.page_size}
        }

        if not self.resource_types:
            return [dict(base)]

        return [
            dict(base, LookupAttributes=[{
                'AttributeKey': 'ResourceType',
                'AttributeValue': resource_type
            }])
            for resource_type in self.resource_types
        ]

    def iter_pages(self, request: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        """Yield pages until the continuation token is exhausted"""
        paginator = self.client.get_paginator('lookup_events')
        pages = iter(paginator.paginate(**request))
        page_number = 0

        while True:
            try:
                page = next(pages)
            except StopIteration:
                return
            except (ClientError, BotoCoreError) as e:
                raise EventLookupError(f"LookupEvents failed after {page_number} page(s): {e}")

            page_number += 1
            logger.debug(f"Fetched page {page_number} with {len(page.get('Events', []))} events")
            yield page

    def run(self, window: TimeWindow) -> Iterator[str]:
        """Yield output lines for every event in the window, in API order"""
        for request in self.build_requests(window):
            facet = request.get('LookupAttributes', [{}])[0].get('AttributeValue', 'all resource types')
            logger.info(f"Looking up CloudTrail events for {facet}")

            for page in self.iter_pages(request):
                for event in page.get('Events', []):
                    event_text = event.get('CloudTrailEvent')
                    if not event_text:
                        continue
                    yield from self.processor.process(event_text, envelope=event)


def lookup_lines(client, processor: EventProcessor, settings: ParseSettings) -> Iterator[str]:
    """
    Resolve the time window and run the lookup.

    A window error is reported as a single inline error line and no request
    is made. No configured window means no lookup at all.
    """
    try:
        window = resolve_time_window(settings)
    except TimeWindowError as e:
        logger.debug(f"Invalid time window: {e}")
        yield error_line(str(e))
        return

    if window is None:
        return

    lookup = CloudTrailLookup(client, processor, resource_types=settings.resource_types)
    yield from lookup.run(window)
