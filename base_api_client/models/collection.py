"""
Collection
==========
Ordered list of hydrated models plus the pagination meta of the response
they came from.
"""

import copy
import json
from typing import Any, Dict, Iterator, List, Optional, Type, Union

from ..exceptions import MalformedInputError
from ..log_config import LogConfig
from ..response import Response
from ..utils import dotted_get, dotted_set, to_plain
from .base import Model, ModelRegistry, models
from .common import Pagination

logger = LogConfig.get_logger("collection")


class Collection:
    """
    Models built from a raw list or a {data, meta} Response.

    Usage:
        posts = Collection(response, Post)
        posts.total()           # meta pagination.total, or len(posts)
        posts.has_more_pages()  # current_page < total_pages
        for post in posts: ...
    """

    def __init__(
        self,
        items: Union[Response, Dict[str, Any], List[Any]],
        model: Union[str, Type[Model]],
        registry: Optional[ModelRegistry] = None,
    ):
        """
        Args:
            items: Response (or decoded dict) shaped {"data": [...], "meta": {...}}, or a raw list
            model: Model class or a name registered in the registry
            registry: Registry used for string model names (default: models)

        Raises:
            InvalidModelError: Model cannot be resolved
            MalformedInputError: items is neither a Response nor a list
        """
        self.model = (registry or models).resolve(model)

        # An already-decoded {data, meta} body
        if isinstance(items, dict):
            items = Response(items)

        if isinstance(items, Response):
            self.response: Optional[Response] = items
            self.meta: Dict[str, Any] = copy.deepcopy(items.get("meta") or {})
            raw = items.get("data") or []
        elif isinstance(items, (list, tuple)):
            self.response = None
            self.meta = {}
            raw = items
        else:
            raise MalformedInputError(
                f"{items!r} needs to be an instance of Response or a list."
            )

        if not isinstance(raw, (list, tuple)):
            raise MalformedInputError(f"Collection data must be a list, got {type(raw).__name__}")

        self._items: List[Model] = [self._hydrate(item) for item in raw]
        logger.debug(f"Hydrated {len(self._items)} {self.model.__name__} item(s)")

    def _hydrate(self, item: Any) -> Model:
        if isinstance(item, self.model):
            return item
        return self.model(item)

    # ─── Pagination ──────────────────────────────────────────

    def total(self) -> int:
        """
        Total number of items in the data source.

        Falls back to the number of loaded items; the fallback is written into
        meta so later calls return the same value.
        """
        total = self.get_meta("pagination.total", None)
        if total is None:
            total = len(self._items)
            self.set_meta("pagination.total", total)
        return total

    def has_more_pages(self) -> bool:
        return self.get_meta("pagination.current_page", 0) < self.get_meta("pagination.total_pages", 0)

    @property
    def pagination(self) -> Pagination:
        """Typed snapshot of meta["pagination"]."""
        return Pagination(**(self.get_meta("pagination") or {}))

    # ─── Meta ────────────────────────────────────────────────

    def get_meta(self, key: str, default: Any = None) -> Any:
        """Get an item from meta using "dot" notation."""
        return dotted_get(self.meta, key, default)

    def set_meta(self, key: str, value: Any) -> Dict[str, Any]:
        """Set an item in meta using "dot" notation."""
        return dotted_set(self.meta, key, value)

    # ─── Items ───────────────────────────────────────────────

    def all(self) -> List[Model]:
        return self._items

    def has(self, index: int) -> bool:
        """Check whether an item exists at index."""
        try:
            self._items[index]
        except (IndexError, TypeError):
            return False
        return True

    def __getitem__(self, index: int) -> Model:
        return self._items[index]

    def __setitem__(self, index: int, value: Model) -> None:
        self._items[index] = value

    def __delitem__(self, index: int) -> None:
        del self._items[index]

    def __iter__(self) -> Iterator[Model]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    # ─── Serialization ──────────────────────────────────────

    def to_array(self) -> Dict[str, Any]:
        return {
            "data": [to_plain(item) for item in self._items],
            "meta": to_plain(self.meta),
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.to_array()

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_array(), **kwargs)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"<Collection {self.model.__name__} x{len(self._items)}>"
