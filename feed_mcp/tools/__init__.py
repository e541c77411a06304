"""
MCP Tools Package

CATALOG is the fixed, ordered list of tools the server exposes. Each entry
is an MCPTool subclass instantiated once per registry with the FeedConfig.
"""

from .entities import (
    ListAvailableEntityTypesTool,
    ListEntityValuesTool,
    ListReportTypesTool,
    LookupCitiesTool,
)
from .search import (
    AdvancedContentSearchTool,
    GetLatestMarketReportByCityTool,
    GetLatestPriceAnalysisByCityTool,
    SearchByCityTool,
    SearchByReportTypeTool,
    SearchReportsByDateRangeTool,
)

CATALOG = (
    ListAvailableEntityTypesTool,
    ListEntityValuesTool,
    SearchByReportTypeTool,
    LookupCitiesTool,
    SearchByCityTool,
    ListReportTypesTool,
    SearchReportsByDateRangeTool,
    AdvancedContentSearchTool,
    GetLatestMarketReportByCityTool,
    GetLatestPriceAnalysisByCityTool,
)

__all__ = ["CATALOG"]
