"""
Entity Discovery Tools

Expose the feed's filter dimensions (entity types) and the concrete values
within them, so the LLM can find exact spellings before searching.
"""

import logging
from typing import Any, Dict, List

from ..base import MCPTool, RemoteApiError, ToolParameter
from ..client import HttpCallSpec
from ..queries import CITY, REPORT, entity_types_request, entity_values_request

logger = logging.getLogger(__name__)


def _unique_values(body: Any, tool_name: str) -> List[str]:
    values = body.get("unique_entity_value") if isinstance(body, dict) else None
    if not isinstance(values, list):
        raise RemoteApiError(
            "Malformed response body: missing unique_entity_value list",
            details=body,
            tool_name=tool_name,
        )
    return values


class ListAvailableEntityTypesTool(MCPTool):
    """List the entity types the feed can be filtered by."""

    @property
    def name(self) -> str:
        return "list_available_entity_types"

    @property
    def description(self) -> str:
        return (
            "Get a list of all available entity types in the real estate content feed "
            "that can be used for filtering content"
        )

    @property
    def category(self) -> str:
        return "entities"

    def build_request(self) -> HttpCallSpec:
        return entity_types_request(self.config.feed_id)


class ListEntityValuesTool(MCPTool):
    """List every value of one entity type."""

    @property
    def name(self) -> str:
        return "list_entity_values"

    @property
    def description(self) -> str:
        return (
            "Get all available values for a specific entity type "
            "(e.g., all report types, all city names"
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="entity_type",
                type="string",
                description="The entity type to get values for (e.g., 'Report', 'city')",
                required=True
            )
        ]

    @property
    def category(self) -> str:
        return "entities"

    def build_request(self, entity_type: str) -> HttpCallSpec:
        return entity_values_request(self.config.feed_id, entity_type)


class LookupCitiesTool(MCPTool):
    """
    Find exact city names containing a partial name.

    The remote API has no partial matching, so the full city list is fetched
    and filtered here (case-insensitive substring, remote order kept).
    """

    @property
    def name(self) -> str:
        return "lookup_cities"

    @property
    def description(self) -> str:
        return (
            "Get the exact city name formats available in the database before searching. "
            "Use this to find the correct city name format for use with search_by_city."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="partial_name",
                type="string",
                description="Partial city name to find matches for (e.g., 'New York', 'Los Angeles')",
                required=True
            )
        ]

    @property
    def category(self) -> str:
        return "entities"

    def build_request(self, partial_name: str) -> HttpCallSpec:
        # partial_name is applied locally in normalize()
        return entity_values_request(self.config.feed_id, CITY)

    def normalize(self, body: Any, partial_name: str = "") -> Dict[str, Any]:
        needle = partial_name.lower()
        matched = [
            city for city in _unique_values(body, self.name)
            if isinstance(city, str) and needle in city.lower()
        ]
        logger.info(f"lookup_cities matched {len(matched)} cities for {partial_name!r}")
        return {
            "status": "success",
            "matched_cities": matched,
            "count": len(matched),
            "usage_note": "Use one of these exact city names with the search_by_city tool",
        }


class ListReportTypesTool(MCPTool):
    """List the report types available in the feed."""

    @property
    def name(self) -> str:
        return "list_report_types"

    @property
    def description(self) -> str:
        return "Get a list of all available report types in the database"

    @property
    def category(self) -> str:
        return "entities"

    def build_request(self) -> HttpCallSpec:
        return entity_values_request(self.config.feed_id, REPORT)

    def normalize(self, body: Any) -> Dict[str, Any]:
        report_types = _unique_values(body, self.name)
        return {
            "status": "success",
            "report_types": report_types,
            "count": len(report_types),
            "usage_note": "Use one of these exact report types with search_by_report_type tool",
        }
