"""Browser tools and a scraper lifecycle manager exposed over MCP."""

__version__ = "1.0.0"
