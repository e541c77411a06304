"""
Content Search Tools

Every tool here issues one POST /api/content/feed. The single-filter and
latest-report tools differ only in which entity filters they send, which is
declared in ENTITY_FILTERS below.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..base import MCPTool, ToolParameter
from ..client import HttpCallSpec
from ..queries import DEFAULT_PAGE_SIZE, EntityFilter, FeedQuery

logger = logging.getLogger(__name__)

# The only report type the latest-by-city tools look at.
MAJOR_CITIES_MONTHLY_REPORT = "Monthly Report: Major Cities"

PAGE_NUM = ToolParameter(
    name="page_num",
    type="integer",
    description="Page number for pagination (0-based)",
    required=False,
    default=0
)

PAGE_SIZE = ToolParameter(
    name="page_size",
    type="integer",
    description="Number of items per page (1-50)",
    required=False,
    default=DEFAULT_PAGE_SIZE
)

CITY_NAME_EXAMPLE = ToolParameter(
    name="city_name",
    type="string",
    description="City name (e.g., 'New York', 'Los Angeles')",
    required=True
)

ENTITY_DETAILS = ToolParameter(
    name="entity_details",
    type="array",
    description="List of entity filters to apply (e.g., report type, city)",
    required=False,
    items={
        "type": "object",
        "properties": {
            "entity_type": {
                "type": "string",
                "description": "Type of entity to filter by (e.g., 'Report', 'city')"
            },
            "entity_value": {
                "type": "string",
                "description": (
                    "Value of the entity to filter by. IMPORTANT: The API requires exact city "
                    "name matching when filtering by city. Use lookup_cities first to find the "
                    "correct name format to use."
                )
            }
        },
        "required": ["entity_type", "entity_value"]
    }
)

FilterBuilder = Callable[..., Tuple[EntityFilter, ...]]


def _latest_city_report(city_name: str, **_) -> Tuple[EntityFilter, ...]:
    return (
        EntityFilter.city(city_name),
        EntityFilter.report(MAJOR_CITIES_MONTHLY_REPORT),
    )


# tool name -> entity filters sent with the query
ENTITY_FILTERS: Dict[str, FilterBuilder] = {
    "search_by_report_type": lambda report_type, **_: (EntityFilter.report(report_type),),
    "search_by_city": lambda city_name, **_: (EntityFilter.city(city_name),),
    "get_latest_market_report_by_city": _latest_city_report,
    # Sends the same query as the market report tool.
    "get_latest_price_analysis_by_city": _latest_city_report,
}


class FeedSearchTool(MCPTool):
    """
    Base for tools that query the feed.

    Subclasses either rely on ENTITY_FILTERS or override query().
    """

    @property
    def category(self) -> str:
        return "search"

    def query(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, **kwargs) -> FeedQuery:
        return FeedQuery.create(
            self.config.feed_id,
            page_num=page_num,
            page_size=page_size,
            entity_details=ENTITY_FILTERS[self.name](**kwargs),
        )

    def build_request(self, **kwargs) -> HttpCallSpec:
        query = self.query(**kwargs)
        logger.debug(f"{self.name} query: {query}")
        return query.to_request()


class SearchByReportTypeTool(FeedSearchTool):

    @property
    def name(self) -> str:
        return "search_by_report_type"

    @property
    def description(self) -> str:
        return (
            "Search for real estate content by report type. Use list_report_types first "
            "if you're unsure about the exact report type to use."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="report_type",
                type="string",
                description="Report type to search for (e.g., 'Market Report', 'Price Analysis', etc.)",
                required=True
            ),
            PAGE_NUM,
            PAGE_SIZE,
        ]


class SearchByCityTool(FeedSearchTool):

    @property
    def name(self) -> str:
        return "search_by_city"

    @property
    def description(self) -> str:
        return (
            "Search for real estate content by city name. IMPORTANT: The API requires exact "
            "city name matching. Use lookup_cities first to find the correct name format to use."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="city_name",
                type="string",
                description="Exact city name to search for (must match format in database exactly)",
                required=True
            ),
            PAGE_NUM,
            PAGE_SIZE,
        ]


class SearchReportsByDateRangeTool(FeedSearchTool):

    @property
    def name(self) -> str:
        return "search_reports_by_date_range"

    @property
    def description(self) -> str:
        return "Search for real estate content published within a specific date range"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="start_date",
                type="string",
                description="Start date in YYYY-MM-DD format",
                required=True
            ),
            ToolParameter(
                name="end_date",
                type="string",
                description="End date in YYYY-MM-DD format",
                required=True
            ),
            PAGE_NUM,
            PAGE_SIZE,
        ]

    def query(
        self,
        start_date: str,
        end_date: str,
        page_num: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> FeedQuery:
        return FeedQuery.create(
            self.config.feed_id,
            page_num=page_num,
            page_size=page_size,
            published_date_from=start_date,
            published_date_to=end_date,
        )


class AdvancedContentSearchTool(FeedSearchTool):
    """Caller-supplied dates, pagination and filters, passed through as given."""

    @property
    def name(self) -> str:
        return "advanced_content_search"

    @property
    def description(self) -> str:
        return "Advanced search for real estate content with multiple filter criteria"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="published_date_from",
                type="string",
                description="Start date in YYYY-MM-DD format",
                required=False
            ),
            ToolParameter(
                name="published_date_to",
                type="string",
                description="End date in YYYY-MM-DD format",
                required=False
            ),
            replace(PAGE_NUM, required=True),
            replace(PAGE_SIZE, required=True),
            ENTITY_DETAILS,
        ]

    def query(
        self,
        page_num: int,
        page_size: int,
        published_date_from: Optional[str] = None,
        published_date_to: Optional[str] = None,
        entity_details: Optional[List[Dict[str, Any]]] = None,
    ) -> FeedQuery:
        return FeedQuery.create(
            self.config.feed_id,
            page_num=page_num,
            page_size=page_size,
            published_date_from=published_date_from,
            published_date_to=published_date_to,
            entity_details=[EntityFilter.from_dict(item) for item in entity_details or []],
        )


class LatestCityReportTool(FeedSearchTool):
    """Newest single item for a city: always page 0, one item."""

    @property
    def parameters(self) -> List[ToolParameter]:
        return [CITY_NAME_EXAMPLE]

    def query(self, city_name: str) -> FeedQuery:
        return FeedQuery.create(
            self.config.feed_id,
            page_num=0,
            page_size=1,
            entity_details=ENTITY_FILTERS[self.name](city_name=city_name),
        )


class GetLatestMarketReportByCityTool(LatestCityReportTool):

    @property
    def name(self) -> str:
        return "get_latest_market_report_by_city"

    @property
    def description(self) -> str:
        return (
            "Get the latest market report for a specific city. Use lookup_cities first "
            "if you're unsure of the exact city name."
        )


class GetLatestPriceAnalysisByCityTool(LatestCityReportTool):

    @property
    def name(self) -> str:
        return "get_latest_price_analysis_by_city"

    @property
    def description(self) -> str:
        return "Get the latest price analysis report for a specific city"
