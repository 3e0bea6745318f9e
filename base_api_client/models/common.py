"""
Common Models
=============
Pydantic base and shared value types.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientModel(BaseModel):
    """
    Base for typed value objects.

    Unknown API fields are kept (extra="allow") and come back out of
    to_array(), which is what Model serialization calls on stored values.
    """

    model_config = ConfigDict(extra="allow")

    def to_array(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Pagination(ClientModel):
    """Pagination block of a collection response's meta."""
    total: Optional[int] = None
    count: Optional[int] = None
    per_page: Optional[int] = None
    current_page: int = 0
    total_pages: int = 0
    links: Any = Field(default_factory=dict)

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.total_pages
