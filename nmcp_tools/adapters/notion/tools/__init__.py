"""Notion tools package.

Exports all Notion tool families for easy importing.
"""

from .pages import NotionPageTools
from .databases import NotionDatabaseTools
from .blocks import NotionBlockTools
from .search import NotionSearchTools

__all__ = [
    "NotionPageTools",
    "NotionDatabaseTools",
    "NotionBlockTools",
    "NotionSearchTools",
]
