"""Property records and property descriptors.

A property stored on an object is either a DataProperty or an
AccessorProperty. A PropertyDescriptor is the partial, caller-supplied
form used by define_property: every field may be missing.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .errors import JSTypeError, TypeConflictError
from .values import UNDEFINED, JSValue, to_boolean


class _Missing:
    """Marker for a descriptor field that was not supplied."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

# getter(this) -> value, setter(this, value) -> None
Getter = Callable[[Any], JSValue]
Setter = Callable[[Any, JSValue], Any]

DESCRIPTOR_FIELDS = ("value", "writable", "get", "set", "enumerable", "configurable")


@dataclass(frozen=True)
class DataProperty:
    """A property holding a value. Records are immutable; changes store a replacement."""

    value: JSValue = UNDEFINED
    writable: bool = False
    enumerable: bool = False
    configurable: bool = False

    def to_descriptor(self) -> "PropertyDescriptor":
        return PropertyDescriptor(
            value=self.value,
            writable=self.writable,
            enumerable=self.enumerable,
            configurable=self.configurable,
        )


@dataclass(frozen=True)
class AccessorProperty:
    """A property whose reads and writes go through getter/setter functions."""

    getter: Optional[Getter] = None
    setter: Optional[Setter] = None
    enumerable: bool = False
    configurable: bool = False

    def to_descriptor(self) -> "PropertyDescriptor":
        return PropertyDescriptor(
            get=self.getter,
            set=self.setter,
            enumerable=self.enumerable,
            configurable=self.configurable,
        )


Property = Union[DataProperty, AccessorProperty]


def _check_function(value: Any, attr: str) -> Optional[Callable]:
    if value is None or value is UNDEFINED:
        return None
    if not callable(value):
        raise JSTypeError(f"Property descriptor {attr} must be a function: {value!r}")
    return value


@dataclass
class PropertyDescriptor:
    """A partial property descriptor.

    Fields that were not supplied hold MISSING. For ``get`` and ``set``,
    ``None`` means "supplied, but absent" (JavaScript ``undefined``), which is
    different from not supplying the field at all.
    """

    value: Any = MISSING
    writable: Any = MISSING
    get: Any = MISSING
    set: Any = MISSING
    enumerable: Any = MISSING
    configurable: Any = MISSING

    def __post_init__(self) -> None:
        for attr in ("writable", "enumerable", "configurable"):
            current = getattr(self, attr)
            if current is not MISSING:
                setattr(self, attr, to_boolean(current))
        for attr in ("get", "set"):
            current = getattr(self, attr)
            if current is not MISSING:
                setattr(self, attr, _check_function(current, attr))

    def has(self, attr: str) -> bool:
        """Check whether a field was supplied."""
        return getattr(self, attr) is not MISSING

    def is_data_descriptor(self) -> bool:
        return self.has("value") or self.has("writable")

    def is_accessor_descriptor(self) -> bool:
        return self.has("get") or self.has("set")

    def is_generic_descriptor(self) -> bool:
        return not self.is_data_descriptor() and not self.is_accessor_descriptor()

    def validate(self, name: str = "") -> None:
        """Reject descriptors that mix data and accessor fields."""
        if self.is_data_descriptor() and self.is_accessor_descriptor():
            raise TypeConflictError(name)

    def to_property(self) -> Property:
        """Build a new property, defaulting omitted booleans to False and functions to absent."""
        enumerable = self.enumerable if self.has("enumerable") else False
        configurable = self.configurable if self.has("configurable") else False
        if self.is_accessor_descriptor():
            return AccessorProperty(
                getter=self.get if self.has("get") else None,
                setter=self.set if self.has("set") else None,
                enumerable=enumerable,
                configurable=configurable,
            )
        return DataProperty(
            value=self.value if self.has("value") else UNDEFINED,
            writable=self.writable if self.has("writable") else False,
            enumerable=enumerable,
            configurable=configurable,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Supplied fields only, with absent functions as UNDEFINED."""
        result = {}
        for f in fields(self):
            current = getattr(self, f.name)
            if current is MISSING:
                continue
            if f.name in ("get", "set") and current is None:
                current = UNDEFINED
            result[f.name] = current
        return result

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PropertyDescriptor":
        """Build a descriptor from a mapping using the JavaScript field names.

        Unknown keys are ignored.
        """
        return cls(**{k: mapping[k] for k in DESCRIPTOR_FIELDS if k in mapping})

    @classmethod
    def from_object(cls, obj: Any) -> "PropertyDescriptor":
        """Build a descriptor from a JSObject's (possibly inherited) properties."""
        return cls(**{k: obj.get(k) for k in DESCRIPTOR_FIELDS if obj.has_property(k)})


def to_property_descriptor(descriptor: Any) -> PropertyDescriptor:
    """Coerce a PropertyDescriptor, mapping or JSObject into a PropertyDescriptor."""
    if isinstance(descriptor, PropertyDescriptor):
        return descriptor
    if isinstance(descriptor, Mapping):
        return PropertyDescriptor.from_mapping(descriptor)
    if hasattr(descriptor, "has_property"):
        return PropertyDescriptor.from_object(descriptor)
    raise JSTypeError(f"Property description must be an object: {descriptor!r}")
