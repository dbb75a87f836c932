"""
Data model definitions package.

Aggregates the route table and upstream request types for use in other modules.
"""

from .route import ROUTES, RouteDescriptor
from .upstream import UpstreamRequest

__all__ = [
    "ROUTES",
    "RouteDescriptor",
    "UpstreamRequest",
]
