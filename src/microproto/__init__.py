"""
microproto - A Pure Python JavaScript Object Model

Objects with descriptor-controlled properties (enumerable, configurable,
writable, get/set) and prototype-chain lookup, plus the built-in
Object.prototype / Function.prototype surface, implemented entirely in
Python with no external dependencies.
"""

__version__ = "0.1.0"

from .errors import (
    CyclicPrototypeError,
    JSError,
    JSTypeError,
    NotConfigurableError,
    NotExtensibleError,
    TypeConflictError,
)
from .functions import JSFunction
from .objects import JSObject, PropertyNames
from .properties import AccessorProperty, DataProperty, PropertyDescriptor
from .realm import Accessor, Realm, create_object, default_realm
from .values import UNDEFINED, NULL, JSValue

__all__ = [
    "Accessor",
    "AccessorProperty",
    "CyclicPrototypeError",
    "DataProperty",
    "JSError",
    "JSFunction",
    "JSObject",
    "JSTypeError",
    "JSValue",
    "NotConfigurableError",
    "NotExtensibleError",
    "PropertyDescriptor",
    "PropertyNames",
    "Realm",
    "TypeConflictError",
    "create_object",
    "default_realm",
    "UNDEFINED",
    "NULL",
]
