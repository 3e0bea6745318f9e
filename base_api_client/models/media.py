"""
Media Model
===========
Named URL variants of a file-like attribute.
"""

from typing import Any, Dict, Optional

from pydantic import Field, ValidationError

from ..config import DEFAULT_MEDIA_VARIANT
from ..exceptions import MalformedInputError
from .common import ClientModel


class Media(ClientModel):
    """
    Set of URL variants for one file.

    Fields:
        variants: variant name → URL (e.g. {"original": ..., "thumbnail": ...})

    Usage:
        cover = Media({"original": "http://x/1.jpg"})
        cover.url()                      # "http://x/1.jpg"
        cover.url("thumbnail", "none")   # "none"
    """

    variants: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, variants: Optional[Dict[str, Any]] = None, **data: Any):
        super().__init__(variants=variants or {}, **data)

    @classmethod
    def wrap(cls, value: Any) -> "Media":
        """
        Wrap a raw attribute value.

        A bare URL string becomes the default variant. None and other empty
        values (an empty list is how some servers encode an empty object) give
        an empty Media.

        Raises:
            MalformedInputError: value is not a URL, a variant mapping or empty
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls({DEFAULT_MEDIA_VARIANT: value})
        if not value or isinstance(value, dict):
            try:
                return cls(value or None)
            except ValidationError as e:
                raise MalformedInputError(f"Invalid media variants {value!r}") from e
        raise MalformedInputError(
            f"{value!r} needs to be a URL string or a mapping of variant URLs."
        )

    @property
    def has_media(self) -> bool:
        return bool(self.variants)

    def url(self, size: str = DEFAULT_MEDIA_VARIANT, default: Any = "") -> Any:
        """URL of the given variant, or default when it is missing."""
        return self.variants.get(size, default)

    def to_array(self) -> Dict[str, Any]:
        return dict(self.variants)

    def __bool__(self) -> bool:
        return self.has_media
