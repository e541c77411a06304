"""
Unit tests for request construction: tool name + arguments -> HttpCallSpec.
"""

import pytest

from feed_mcp.base import UnknownToolError, ValidationError
from feed_mcp.client import HttpCallSpec
from feed_mcp.queries import EntityFilter, FeedQuery

MONTHLY = {"entity_type": "Report", "entity_value": "Monthly Report: Major Cities"}


class TestEntityRequests:

    def test_list_available_entity_types(self, registry):
        spec = registry.build_request("list_available_entity_types")
        assert spec == HttpCallSpec("GET", "/api/content/entity_types/292")

    def test_list_entity_values(self, registry):
        spec = registry.build_request("list_entity_values", {"entity_type": "Report"})
        assert spec.method == "GET"
        assert spec.path == "/api/content/entity_values/292"
        assert spec.params == {"entity_type": "Report"}

    def test_lookup_cities_never_sends_partial_name(self, registry):
        spec = registry.build_request("lookup_cities", {"partial_name": "new"})
        assert spec.params == {"entity_type": "city"}
        assert spec.json is None

    def test_list_report_types(self, registry):
        spec = registry.build_request("list_report_types")
        assert spec.params == {"entity_type": "Report"}

    def test_feed_id_comes_from_config(self, config):
        from dataclasses import replace
        from feed_mcp.registry import ToolRegistry

        other = ToolRegistry(replace(config, feed_id=7))
        assert other.build_request("list_available_entity_types").path == "/api/content/entity_types/7"


class TestSearchRequests:

    def test_search_by_city_defaults(self, registry):
        spec = registry.build_request("search_by_city", {"city_name": "Austin"})
        assert spec.method == "POST"
        assert spec.path == "/api/content/feed"
        assert spec.json == {
            "feed_id": 292,
            "page_num": 0,
            "page_size": 10,
            "entity_details": [{"entity_type": "city", "entity_value": "Austin"}],
        }

    def test_search_by_report_type(self, registry):
        spec = registry.build_request(
            "search_by_report_type",
            {"report_type": "Market Report", "page_num": 3, "page_size": 20},
        )
        assert spec.json == {
            "feed_id": 292,
            "page_num": 3,
            "page_size": 20,
            "entity_details": [{"entity_type": "Report", "entity_value": "Market Report"}],
        }

    def test_date_range_has_no_entity_filter(self, registry):
        spec = registry.build_request(
            "search_reports_by_date_range",
            {"start_date": "2024-01-01", "end_date": "2024-03-31"},
        )
        assert spec.json == {
            "feed_id": 292,
            "page_num": 0,
            "page_size": 10,
            "published_date_from": "2024-01-01",
            "published_date_to": "2024-03-31",
        }

    def test_advanced_search_without_filters(self, registry):
        spec = registry.build_request("advanced_content_search", {"page_num": 2, "page_size": 5})
        assert spec.json == {"feed_id": 292, "page_num": 2, "page_size": 5}

    def test_advanced_search_passes_filters_in_order(self, registry):
        filters = [
            {"entity_type": "city", "entity_value": "Miami"},
            {"entity_type": "Report", "entity_value": "Price Analysis"},
        ]
        spec = registry.build_request(
            "advanced_content_search",
            {
                "page_num": 0,
                "page_size": 25,
                "published_date_from": "2024-01-01",
                "published_date_to": "2024-12-31",
                "entity_details": filters,
            },
        )
        assert spec.json["entity_details"] == filters
        assert spec.json["published_date_from"] == "2024-01-01"
        assert spec.json["published_date_to"] == "2024-12-31"

    def test_advanced_search_empty_filter_list_is_omitted(self, registry):
        spec = registry.build_request(
            "advanced_content_search", {"page_num": 0, "page_size": 5, "entity_details": []}
        )
        assert "entity_details" not in spec.json

    def test_advanced_search_does_not_default_pagination(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            registry.build_request("advanced_content_search", {"page_num": 1})
        assert "page_size" in exc_info.value.message

    def test_latest_market_report_forces_single_item(self, registry):
        spec = registry.build_request(
            "get_latest_market_report_by_city",
            {"city_name": "Miami", "page_size": 40, "page_num": 3},
        )
        assert spec.json == {
            "feed_id": 292,
            "page_num": 0,
            "page_size": 1,
            "entity_details": [{"entity_type": "city", "entity_value": "Miami"}, MONTHLY],
        }

    def test_price_analysis_matches_market_report_query(self, registry):
        # Both tools currently ask for the same monthly report.
        market = registry.build_request("get_latest_market_report_by_city", {"city_name": "Miami"})
        price = registry.build_request("get_latest_price_analysis_by_city", {"city_name": "Miami"})
        assert market == price

    def test_unknown_tool(self, registry):
        with pytest.raises(UnknownToolError) as exc_info:
            registry.build_request("delete_everything", {})
        assert exc_info.value.message == "Unknown tool: delete_everything"


class TestPagination:

    @pytest.mark.parametrize("requested, expected", [(0, 1), (-3, 1), (51, 50), (500, 50), (50, 50), (1, 1)])
    def test_page_size_clamped(self, registry, requested, expected):
        spec = registry.build_request("search_by_city", {"city_name": "Austin", "page_size": requested})
        assert spec.json["page_size"] == expected

    def test_negative_page_num_clamped(self, registry):
        spec = registry.build_request(
            "advanced_content_search", {"page_num": -1, "page_size": 5}
        )
        assert spec.json["page_num"] == 0

    def test_feed_query_create_clamps(self):
        query = FeedQuery.create(292, page_num=-2, page_size=99, entity_details=[EntityFilter.city("Austin")])
        assert query.page_num == 0
        assert query.page_size == 50
        assert query.entity_details == (EntityFilter("city", "Austin"),)


class TestValidation:

    def test_missing_required(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            registry.build_request("search_by_city", {})
        assert exc_info.value.message == "Missing required parameter: city_name"

    def test_numeric_strings_coerced(self, registry):
        spec = registry.build_request(
            "search_by_city", {"city_name": "Austin", "page_num": "2", "page_size": "15"}
        )
        assert spec.json["page_num"] == 2
        assert spec.json["page_size"] == 15

    def test_non_integer_rejected(self, registry):
        with pytest.raises(ValidationError):
            registry.build_request("search_by_city", {"city_name": "Austin", "page_size": "ten"})

    def test_boolean_is_not_an_integer(self, registry):
        with pytest.raises(ValidationError):
            registry.build_request("search_by_city", {"city_name": "Austin", "page_num": True})

    def test_string_required_for_city(self, registry):
        with pytest.raises(ValidationError):
            registry.build_request("search_by_city", {"city_name": 42})

    def test_entity_details_must_be_list(self, registry):
        with pytest.raises(ValidationError):
            registry.build_request(
                "advanced_content_search",
                {"page_num": 0, "page_size": 5, "entity_details": {"entity_type": "city"}},
            )

    def test_entity_detail_missing_value(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            registry.build_request(
                "advanced_content_search",
                {"page_num": 0, "page_size": 5, "entity_details": [{"entity_type": "city"}]},
            )
        assert exc_info.value.message == "entity_details[0] is missing required field 'entity_value'"

    def test_undeclared_arguments_ignored(self, registry):
        spec = registry.build_request("list_available_entity_types", {"unexpected": 1})
        assert spec.path == "/api/content/entity_types/292"
