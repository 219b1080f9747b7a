"""
DetaKit - Paging Models

Pydantic models for paginated Fetch and List responses.

The service returns a page plus paging metadata. When more pages remain,
`paging.last` holds the cursor to pass into the next call; when it is None
the result set is exhausted. Nothing here pages automatically.

Author: DetaKit Project
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Paging(BaseModel):
    """Paging metadata of one page"""
    size: int = 0
    last: Optional[str] = None


class FetchOutput(BaseModel):
    """Response model for a Base fetch"""
    paging: Paging = Field(default_factory=Paging)
    items: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def last(self) -> Optional[str]:
        """Cursor for the next page, None when no pages are left."""
        return self.paging.last


class ListOutput(BaseModel):
    """Response model for a Drive list"""
    paging: Paging = Field(default_factory=Paging)
    names: List[str] = Field(default_factory=list)

    @property
    def last(self) -> Optional[str]:
        """Cursor for the next page, None when no pages are left."""
        return self.paging.last
