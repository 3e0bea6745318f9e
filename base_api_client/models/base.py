"""
Base Model
==========
Attribute container shared by all API models.

Attributes live in an ordered dict. Reads and writes go through optional
per-field mutators registered with decorators:

    class Post(Model):
        media_fields = ("cover",)
        date_fields = ("published_at",)

        @get_mutator("title")
        def title_upper(self, value):
            return value.upper() if value else value

        @set_mutator("tags")
        def split_tags(self, value):
            if isinstance(value, str):
                value = [t.strip() for t in value.split(",")]
            self.set_raw_attribute("tags", value)
"""

import json
from typing import Any, Callable, ClassVar, Dict, Iterable, Optional, Tuple, Type, Union

from ..config import TIMESTAMP_FIELDS
from ..exceptions import InvalidModelError, MalformedInputError
from ..response import Response
from ..utils import as_datetime, to_plain
from .media import Media

Mutator = Callable[..., Any]

_GET = "get"
_SET = "set"


def _mutator(direction: str, field: str) -> Callable[[Mutator], Mutator]:
    def decorator(fn: Mutator) -> Mutator:
        fn.__mutator__ = (direction, field)
        return fn
    return decorator


def get_mutator(field: str) -> Callable[[Mutator], Mutator]:
    """Register a method that transforms the stored value of `field` on read."""
    return _mutator(_GET, field)


def set_mutator(field: str) -> Callable[[Mutator], Mutator]:
    """Register a method that takes over assignment of `field`."""
    return _mutator(_SET, field)


class Model:
    """
    Base model for all API resources.

    Features:
        - Built from a dict or from a Response (its "data" key)
        - Per-field get/set mutators
        - media_fields are wrapped in Media on assignment
        - date_fields are converted to datetime on assignment
        - Attribute, item and .get()/.set() access are equivalent
        - .to_array() / .to_json(): stored state, mutators not applied
    """

    media_fields: ClassVar[Tuple[str, ...]] = ()
    date_fields: ClassVar[Tuple[str, ...]] = ()
    timestamps: ClassVar[bool] = False

    # field -> name of the mutator method, resolved on the instance's class per call
    _get_mutators: ClassVar[Dict[str, str]] = {}
    _set_mutators: ClassVar[Dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        getters = dict(cls._get_mutators)
        setters = dict(cls._set_mutators)
        for name, attr in vars(cls).items():
            spec = getattr(attr, "__mutator__", None)
            if spec is None:
                continue
            direction, field = spec
            (getters if direction == _GET else setters)[field] = name
        cls._get_mutators = getters
        cls._set_mutators = setters

    def __init__(self, attributes: Any = None):
        object.__setattr__(self, "_attributes", {})
        if isinstance(attributes, Response):
            attributes = attributes.get("data")
        if isinstance(attributes, dict):
            type(self).fill(self, attributes)
        elif attributes is not None:
            raise MalformedInputError(
                f"{attributes!r} needs to be a dict or a Response."
            )

    def fill(self, attributes: Dict[str, Any]) -> "Model":
        cls = type(self)
        for key, value in attributes.items():
            cls.set_attribute(self, key, value)
        return self

    # ─── Mutator lookup ──────────────────────────────────────

    @classmethod
    def has_get_mutator(cls, key: str) -> bool:
        return key in cls._get_mutators

    @classmethod
    def has_set_mutator(cls, key: str) -> bool:
        return key in cls._set_mutators

    @classmethod
    def get_dates(cls) -> Tuple[str, ...]:
        """Fields converted to datetime on assignment."""
        if cls.timestamps:
            return tuple(cls.date_fields) + tuple(
                f for f in TIMESTAMP_FIELDS if f not in cls.date_fields
            )
        return tuple(cls.date_fields)

    # ─── Attributes ──────────────────────────────────────────
    #
    # Stored fields may shadow any public member name ("attributes", "get",
    # "fill", ...), so internal calls go through type(self), never self.<name>.

    def set_attribute(self, key: str, value: Any) -> "Model":
        """
        Set a given attribute on the model.

        A set mutator, when registered, owns the assignment entirely.
        """
        cls = type(self)
        if key in cls._set_mutators:
            getattr(cls, cls._set_mutators[key])(self, value)
            return self

        if value and key in cls.get_dates():
            value = as_datetime(value)

        if key in cls.media_fields:
            value = Media.wrap(value)

        self._attributes[key] = value
        return self

    def set_raw_attribute(self, key: str, value: Any) -> "Model":
        """Store a value verbatim, bypassing mutators and casting."""
        self._attributes[key] = value
        return self

    def get_attribute(self, key: str) -> Any:
        """Stored value (None if absent), passed through the get mutator if any."""
        cls = type(self)
        value = self._attributes.get(key)
        if key in cls._get_mutators:
            return getattr(cls, cls._get_mutators[key])(self, value)
        return value

    def has(self, key: str) -> bool:
        """Check whether the key is stored."""
        return key in self._attributes

    def get(self, key: str, default: Any = None) -> Any:
        """Same as get_attribute(), with a default for absent keys without a get mutator."""
        cls = type(self)
        if key not in self._attributes and key not in cls._get_mutators:
            return default
        return cls.get_attribute(self, key)

    def set(self, key: str, value: Any) -> "Model":
        return type(self).set_attribute(self, key, value)

    @property
    def attributes(self) -> Dict[str, Any]:
        """Raw attribute dict (live view). A stored "attributes" field takes precedence."""
        return self._attributes

    # ─── Serialization ──────────────────────────────────────

    def to_array(self) -> Dict[str, Any]:
        """
        Project stored attributes to plain JSON-compatible values.

        Media → variant dict, datetime → Zulu string, nested models → dicts.
        """
        return {key: to_plain(value) for key, value in self._attributes.items()}

    def to_dict(self) -> Dict[str, Any]:
        return type(self).to_array(self)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(type(self).to_array(self), **kwargs)

    # ─── Property-style access ──────────────────────────────

    def __getattribute__(self, key: str) -> Any:
        # Stored fields and mutated fields win over class members of the same name
        if key[:1] != "_":
            cls = type(self)
            stored = object.__getattribute__(self, "__dict__").get("_attributes", ())
            if key in stored or key in cls._get_mutators:
                return cls.get_attribute(self, key)
        return object.__getattribute__(self, key)

    def __getattr__(self, key: str) -> Any:
        # Only reached when normal lookup fails
        if key.startswith("_"):
            raise AttributeError(key)
        return type(self).get_attribute(self, key)

    def __setattr__(self, key: str, value: Any) -> None:
        if key.startswith("_"):
            object.__setattr__(self, key, value)
        else:
            type(self).set_attribute(self, key, value)

    def __getitem__(self, key: str) -> Any:
        return type(self).get_attribute(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        type(self).set_attribute(self, key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._attributes == other._attributes

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return type(self).to_json(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._attributes!r}>"


class ModelRegistry:
    """
    Maps logical names to Model classes.

    Usage:
        registry = ModelRegistry()
        registry.register("post", Post)
        registry.resolve("post")   # Post
        registry.resolve(Post)     # Post
    """

    def __init__(self):
        self._models: Dict[str, Type[Model]] = {}

    def register(self, name: str, model: Type[Model]) -> Type[Model]:
        if not (isinstance(model, type) and issubclass(model, Model)):
            raise InvalidModelError(f"{model!r} is not a Model subclass")
        self._models[name] = model
        return model

    def resolve(self, model: Union[str, Type[Model], None]) -> Type[Model]:
        """
        Resolve a Model class or registered name.

        Raises:
            InvalidModelError: Unknown name or not a Model subclass
        """
        if isinstance(model, str):
            try:
                return self._models[model]
            except KeyError:
                raise InvalidModelError(f"No model registered as '{model}'") from None
        if isinstance(model, type) and issubclass(model, Model):
            return model
        raise InvalidModelError(f"{model!r} is not a Model subclass")

    def names(self) -> Iterable[str]:
        return list(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models


# Default registry used by Collection
models = ModelRegistry()


def register_model(name: str, registry: Optional[ModelRegistry] = None):
    """Class decorator registering a Model under `name`."""
    def decorator(cls: Type[Model]) -> Type[Model]:
        (registry or models).register(name, cls)
        return cls
    return decorator
