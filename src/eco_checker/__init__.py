"""Eco Checker MCP Server.

Score how eco-responsible a website is: carbon footprint per page view and
green hosting, combined into one cached 0-100 score with a banner and
recommendations.
"""

__version__ = "0.1.0"
