"""
Request shapes for the content feed API.

FeedQuery is the POST body of /api/content/feed; the entity endpoints are
plain GETs keyed by feed id.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .client import HttpCallSpec

logger = logging.getLogger(__name__)

FEED_PATH = "/api/content/feed"
ENTITY_TYPES_PATH = "/api/content/entity_types/{feed_id}"
ENTITY_VALUES_PATH = "/api/content/entity_values/{feed_id}"

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10

CITY = "city"
REPORT = "Report"  # capitalized on the remote side


@dataclass(frozen=True)
class EntityFilter:
    """A single equality filter; several filters are ANDed remotely."""
    entity_type: str
    entity_value: str

    @classmethod
    def city(cls, name: str) -> "EntityFilter":
        return cls(CITY, name)

    @classmethod
    def report(cls, report_type: str) -> "EntityFilter":
        return cls(REPORT, report_type)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityFilter":
        return cls(data["entity_type"], data["entity_value"])

    def to_dict(self) -> Dict[str, str]:
        return {"entity_type": self.entity_type, "entity_value": self.entity_value}


def clamp_page_size(page_size: int) -> int:
    """Clamp to [1, 50]; an explicit 0 becomes 1, not the default of 10."""
    clamped = min(max(page_size, MIN_PAGE_SIZE), MAX_PAGE_SIZE)
    if clamped != page_size:
        logger.warning(f"page_size {page_size} out of range, using {clamped}")
    return clamped


def clamp_page_num(page_num: int) -> int:
    if page_num < 0:
        logger.warning(f"page_num {page_num} is negative, using 0")
        return 0
    return page_num


@dataclass(frozen=True)
class FeedQuery:
    feed_id: int
    page_num: int
    page_size: int
    published_date_from: Optional[str] = None
    published_date_to: Optional[str] = None
    entity_details: Tuple[EntityFilter, ...] = ()

    @classmethod
    def create(
        cls,
        feed_id: int,
        page_num: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        published_date_from: Optional[str] = None,
        published_date_to: Optional[str] = None,
        entity_details: Iterable[EntityFilter] = (),
    ) -> "FeedQuery":
        """Build a query with pagination clamped to the API's accepted range."""
        return cls(
            feed_id=feed_id,
            page_num=clamp_page_num(page_num),
            page_size=clamp_page_size(page_size),
            published_date_from=published_date_from,
            published_date_to=published_date_to,
            entity_details=tuple(entity_details),
        )

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "feed_id": self.feed_id,
            "page_num": self.page_num,
            "page_size": self.page_size,
        }
        if self.published_date_from is not None:
            body["published_date_from"] = self.published_date_from
        if self.published_date_to is not None:
            body["published_date_to"] = self.published_date_to
        if self.entity_details:
            body["entity_details"] = [f.to_dict() for f in self.entity_details]
        return body

    def to_request(self) -> HttpCallSpec:
        return HttpCallSpec("POST", FEED_PATH, json=self.to_body())


def entity_types_request(feed_id: int) -> HttpCallSpec:
    return HttpCallSpec("GET", ENTITY_TYPES_PATH.format(feed_id=feed_id))


def entity_values_request(feed_id: int, entity_type: str) -> HttpCallSpec:
    return HttpCallSpec(
        "GET",
        ENTITY_VALUES_PATH.format(feed_id=feed_id),
        params={"entity_type": entity_type},
    )
