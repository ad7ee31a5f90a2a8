"""Realm: the built-in prototypes and the Object.* surface."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import JSTypeError
from .functions import JSFunction, construct, instance_of
from .objects import JSObject
from .values import (
    NULL,
    UNDEFINED,
    JSValue,
    to_number as primitive_to_number,
    to_string as primitive_to_string,
)

logger = logging.getLogger(__name__)


@dataclass
class Accessor:
    """Accessor entry for Realm.new_object, the equivalent of ``get x() {}`` in a literal."""

    get: Optional[Callable[[Any], JSValue]] = None
    set: Optional[Callable[[Any, JSValue], Any]] = None


class Realm:
    """A set of built-in prototypes shared by every object created through it."""

    def __init__(self, strict: bool = False):
        """Create a new realm.

        Args:
            strict: Raise JSTypeError on assignments and deletions that would
                otherwise be silently ignored
        """
        self.strict = strict
        self.object_prototype = JSObject()
        self.function_prototype = JSObject(self.object_prototype)
        self.string_prototype = JSObject(self.object_prototype)
        self.number_prototype = JSObject(self.object_prototype)
        self.boolean_prototype = JSObject(self.object_prototype)
        self._setup_object_prototype()
        self._setup_function_prototype()
        self._setup_primitive_prototypes()
        self.object_constructor = self._create_object_constructor()
        self.function_constructor = self._create_function_constructor()

    # -- setup ---------------------------------------------------------------

    def _builtin(self, name: str, body: Callable[..., JSValue], length: int = 0) -> JSFunction:
        """Create a built-in function (no own prototype property)."""
        fn = JSFunction(name, body, self.function_prototype)
        fn.define_property("length", {"value": length, "configurable": True})
        return fn

    def _install(self, target: JSObject, name: str, body: Callable[..., JSValue], length: int = 0) -> None:
        # Built-in methods are non-enumerable so they never show up in for-in
        target.define_property(
            name,
            {
                "value": self._builtin(name, body, length),
                "writable": True,
                "enumerable": False,
                "configurable": True,
            },
        )

    def _setup_object_prototype(self) -> None:
        def proto_toString(this_val, *args):
            if this_val is UNDEFINED:
                return "[object Undefined]"
            if this_val is NULL:
                return "[object Null]"
            if isinstance(this_val, bool):
                return "[object Boolean]"
            if isinstance(this_val, (int, float)):
                return "[object Number]"
            if isinstance(this_val, str):
                return "[object String]"
            if isinstance(this_val, JSFunction):
                return "[object Function]"
            return "[object Object]"

        def proto_valueOf(this_val, *args):
            return this_val

        def proto_hasOwnProperty(this_val, *args):
            prop = primitive_to_string(args[0]) if args else "undefined"
            if isinstance(this_val, JSObject):
                return this_val.has_own_property(prop)
            return False

        def proto_propertyIsEnumerable(this_val, *args):
            prop = primitive_to_string(args[0]) if args else "undefined"
            if isinstance(this_val, JSObject):
                return this_val.is_enumerable_own(prop)
            return False

        def proto_isPrototypeOf(this_val, *args):
            obj = args[0] if args else UNDEFINED
            if not isinstance(this_val, JSObject):
                return False
            return this_val.is_prototype_of(obj)

        proto = self.object_prototype
        self._install(proto, "toString", proto_toString)
        self._install(proto, "valueOf", proto_valueOf)
        self._install(proto, "hasOwnProperty", proto_hasOwnProperty, 1)
        self._install(proto, "propertyIsEnumerable", proto_propertyIsEnumerable, 1)
        self._install(proto, "isPrototypeOf", proto_isPrototypeOf, 1)

    def _setup_function_prototype(self) -> None:
        def fn_call(this_val, this_arg=UNDEFINED, *args):
            if not isinstance(this_val, JSFunction):
                raise JSTypeError("Function.prototype.call called on non-function")
            return this_val.call(this_arg, *args)

        def fn_apply(this_val, this_arg=UNDEFINED, args=None):
            if not isinstance(this_val, JSFunction):
                raise JSTypeError("Function.prototype.apply called on non-function")
            if args is UNDEFINED or args is NULL:
                args = None
            return this_val.apply(this_arg, args)

        def fn_bind(this_val, bound_this=UNDEFINED, *bound_args):
            """Create a bound function with fixed this and optional partial args."""
            if not isinstance(this_val, JSFunction):
                raise JSTypeError("Bind must be called on a function")
            target = this_val

            def bound_body(_this, *args):
                return target(bound_this, *bound_args, *args)

            length = target.get("length")
            if not isinstance(length, int) or isinstance(length, bool):
                length = 0
            return self._builtin(
                "bound " + target.name, bound_body, max(0, length - len(bound_args))
            )

        def fn_toString(this_val, *args):
            name = this_val.name if isinstance(this_val, JSFunction) else ""
            return f"function {name}() {{ [native code] }}"

        self._install(self.function_prototype, "call", fn_call, 1)
        self._install(self.function_prototype, "apply", fn_apply, 2)
        self._install(self.function_prototype, "bind", fn_bind, 1)
        self._install(self.function_prototype, "toString", fn_toString)

    def _setup_primitive_prototypes(self) -> None:
        # Primitives read through these; this is the primitive itself
        def primitive_toString(this_val, *args):
            return primitive_to_string(this_val)

        def primitive_valueOf(this_val, *args):
            return this_val

        for proto in (self.string_prototype, self.number_prototype, self.boolean_prototype):
            self._install(proto, "toString", primitive_toString)
            self._install(proto, "valueOf", primitive_valueOf)

    def _link_constructor(self, fn: JSFunction, prototype: JSObject) -> None:
        fn.define_property("prototype", {"value": prototype})
        prototype.define_property(
            "constructor", {"value": fn, "writable": True, "configurable": True}
        )

    def _create_object_constructor(self) -> JSFunction:
        """Create the Object constructor with static methods."""

        def object_constructor(this_val, *args):
            value = args[0] if args else UNDEFINED
            if isinstance(value, JSObject):
                return value
            return JSObject(self.object_prototype)

        obj_constructor = self._builtin("Object", object_constructor, 1)
        self._link_constructor(obj_constructor, self.object_prototype)

        # Statics ignore this and forward to the realm methods
        statics: List[Tuple[str, Callable[..., Any], int]] = [
            ("create", self.create, 2),
            ("defineProperty", self.define_property, 3),
            ("defineProperties", self.define_properties, 2),
            ("getOwnPropertyDescriptor", self.get_own_property_descriptor, 2),
            ("keys", self.keys, 1),
            ("values", self.values, 1),
            ("entries", self.entries, 1),
            ("assign", self.assign, 2),
            ("getPrototypeOf", self.get_prototype_of, 1),
            ("setPrototypeOf", self.set_prototype_of, 2),
            ("isExtensible", self.is_extensible, 1),
            ("preventExtensions", self.prevent_extensions, 1),
            ("seal", self.seal, 1),
            ("freeze", self.freeze, 1),
            ("isSealed", self.is_sealed, 1),
            ("isFrozen", self.is_frozen, 1),
        ]
        for name, method, length in statics:
            self._install(
                obj_constructor, name, lambda this_val, *args, _m=method: _m(*args), length
            )
        return obj_constructor

    def _create_function_constructor(self) -> JSFunction:
        """Create the Function constructor.

        There is no parser, so the body must be a Python callable taking
        this first; source text is rejected.
        """

        def function_constructor_fn(this_val, *args):
            if not args:
                return self.function("anonymous", lambda this: UNDEFINED)
            body = args[-1]
            if isinstance(body, str) or not callable(body):
                raise JSTypeError("Function bodies must be Python callables, not source text")
            return self.function("anonymous", body, len(args) - 1)

        fn_constructor = self._builtin("Function", function_constructor_fn, 1)
        self._link_constructor(fn_constructor, self.function_prototype)
        return fn_constructor

    def _primitive_prototype(self, value: Any) -> JSObject:
        if isinstance(value, bool):
            return self.boolean_prototype
        if isinstance(value, (int, float)):
            return self.number_prototype
        if isinstance(value, str):
            return self.string_prototype
        return self.object_prototype

    # -- object creation -------------------------------------------------------

    def new_object(self, properties: Optional[Mapping[str, Any]] = None) -> JSObject:
        """Create an object the way an object literal does.

        Plain values become enumerable, writable, configurable data
        properties; Accessor values become enumerable, configurable accessors.
        """
        obj = JSObject(self.object_prototype)
        for key, value in (properties or {}).items():
            if isinstance(value, Accessor):
                obj.define_property(
                    key,
                    {"get": value.get, "set": value.set, "enumerable": True, "configurable": True},
                )
            else:
                obj.define_property(
                    key,
                    {"value": value, "writable": True, "enumerable": True, "configurable": True},
                )
        return obj

    def create(self, prototype: Any, descriptors: Any = None) -> JSObject:
        """Object.create(proto, properties)."""
        if prototype is None or prototype is NULL:
            prototype = None
        elif not isinstance(prototype, JSObject):
            raise JSTypeError(f"Object prototype may only be an Object or null: {prototype!r}")
        obj = JSObject(prototype)
        if descriptors is not None and descriptors is not UNDEFINED:
            obj.define_properties(descriptors)
        return obj

    def function(
        self,
        name: str,
        body: Callable[..., JSValue],
        length: int = 0,
    ) -> JSFunction:
        """Create a user function whose prototype object points back to it via constructor."""
        fn = self._builtin(name, body, length)
        prototype = JSObject(self.object_prototype)
        prototype.define_property(
            "constructor", {"value": fn, "writable": True, "configurable": True}
        )
        fn.define_property("prototype", {"value": prototype, "writable": True})
        return fn

    # -- Object.* statics -----------------------------------------------------

    def define_property(self, obj: Any, key: str, descriptor: Any) -> JSObject:
        """Object.defineProperty(obj, prop, descriptor)."""
        self._require_object(obj, "Object.defineProperty")
        obj.define_property(key, descriptor)
        return obj

    def define_properties(self, obj: Any, descriptors: Any) -> JSObject:
        """Object.defineProperties(obj, props)."""
        self._require_object(obj, "Object.defineProperties")
        obj.define_properties(descriptors)
        return obj

    def get_own_property_descriptor(self, obj: Any, key: str) -> Union[Dict[str, Any], Any]:
        """Object.getOwnPropertyDescriptor(obj, prop): a dict of the fields, or UNDEFINED."""
        if not isinstance(obj, JSObject):
            return UNDEFINED
        prop = obj.get_own_property(key)
        if prop is None:
            return UNDEFINED
        return prop.to_descriptor().to_dict()

    def keys(self, obj: Any) -> List[str]:
        if not isinstance(obj, JSObject):
            return []
        return list(obj.own_enumerable_names())

    def values(self, obj: Any) -> List[JSValue]:
        if not isinstance(obj, JSObject):
            return []
        return [obj.get(k) for k in obj.own_enumerable_names()]

    def entries(self, obj: Any) -> List[Tuple[str, JSValue]]:
        if not isinstance(obj, JSObject):
            return []
        return [(k, obj.get(k)) for k in obj.own_enumerable_names()]

    def assign(self, target: Any, *sources: Any) -> JSObject:
        """Object.assign: copy own enumerable values, failing loudly on rejected writes."""
        self._require_object(target, "Object.assign")
        for source in sources:
            if not isinstance(source, JSObject):
                continue
            for key in source.own_enumerable_names():
                if not target.set(key, source.get(key)):
                    raise JSTypeError(f"Cannot assign to property '{key}' of {target!r}")
        return target

    def get_prototype_of(self, obj: Any) -> Any:
        if isinstance(obj, JSObject):
            return obj.prototype if obj.prototype is not None else NULL
        if obj is UNDEFINED or obj is NULL:
            raise JSTypeError("Cannot convert undefined or null to object")
        return self._primitive_prototype(obj)

    def set_prototype_of(self, obj: Any, prototype: Any) -> Any:
        if isinstance(obj, JSObject):
            obj.set_prototype(prototype)
        return obj

    def is_extensible(self, obj: Any) -> bool:
        return isinstance(obj, JSObject) and obj.extensible

    def prevent_extensions(self, obj: Any) -> Any:
        if isinstance(obj, JSObject):
            obj.prevent_extensions()
        return obj

    def seal(self, obj: Any) -> Any:
        if isinstance(obj, JSObject):
            obj.seal()
        return obj

    def freeze(self, obj: Any) -> Any:
        if isinstance(obj, JSObject):
            obj.freeze()
        return obj

    def is_sealed(self, obj: Any) -> bool:
        return not isinstance(obj, JSObject) or obj.is_sealed()

    def is_frozen(self, obj: Any) -> bool:
        return not isinstance(obj, JSObject) or obj.is_frozen()

    # -- property access -------------------------------------------------------

    def get_property(self, value: Any, key: str) -> JSValue:
        """Read value[key]. Primitives read through their built-in prototype."""
        if isinstance(value, JSObject):
            return value.get(key)
        if value is UNDEFINED or value is NULL or value is None:
            raise JSTypeError(f"Cannot read properties of {value} (reading '{key}')")
        return self._primitive_prototype(value).get(key, receiver=value)

    def put(self, obj: Any, key: str, value: JSValue) -> None:
        """Assign obj[key] = value, raising in strict mode when the write is ignored."""
        if obj is UNDEFINED or obj is NULL or obj is None:
            raise JSTypeError(f"Cannot set properties of {obj} (setting '{key}')")
        if isinstance(obj, JSObject) and obj.set(key, value):
            return
        if self.strict:
            raise JSTypeError(f"Cannot assign to property '{key}' of {obj!r}")
        logger.debug("Assignment to %r ignored", key)

    def delete(self, obj: Any, key: str) -> bool:
        """The delete operator. In strict mode, deleting a locked property raises."""
        if not isinstance(obj, JSObject):
            return True
        if obj.delete_property(key):
            return True
        if obj.has_own_property(key) and self.strict:
            raise JSTypeError(f"Cannot delete property '{key}' of {obj!r}")
        return False

    def has(self, obj: Any, key: str) -> bool:
        """The in operator."""
        if not isinstance(obj, JSObject):
            raise JSTypeError(f"Cannot use 'in' operator to search for '{key}' in {obj!r}")
        return obj.has_property(key)

    def invoke(self, obj: Any, key: str, *args: Any) -> JSValue:
        """Call obj[key](...args) with obj as this."""
        method = self.get_property(obj, key)
        if not callable(method):
            raise JSTypeError(f"{key} is not a function")
        return method(obj, *args)

    # -- functions ---------------------------------------------------------------

    def construct(self, constructor: Any, *args: Any) -> JSObject:
        """new constructor(...args)."""
        return construct(constructor, args, self.object_prototype)

    def instance_of(self, value: Any, constructor: Any) -> bool:
        return instance_of(value, constructor)

    # -- conversions -------------------------------------------------------------

    def to_primitive(self, value: Any, hint: str = "default") -> JSValue:
        """Convert an object to a primitive via valueOf/toString."""
        if not isinstance(value, JSObject):
            return value
        order: Sequence[str] = ("toString", "valueOf") if hint == "string" else ("valueOf", "toString")
        for name in order:
            method = value.get(name)
            if callable(method):
                result = method(value)
                if not isinstance(result, JSObject):
                    return result
        raise JSTypeError("Cannot convert object to primitive value")

    def to_string(self, value: Any) -> str:
        return primitive_to_string(self.to_primitive(value, "string"))

    def to_number(self, value: Any) -> Union[int, float]:
        return primitive_to_number(self.to_primitive(value, "number"))

    def add(self, a: Any, b: Any) -> JSValue:
        """The + operator: string concatenation if either side is a string."""
        pa = self.to_primitive(a)
        pb = self.to_primitive(b)
        if isinstance(pa, str) or isinstance(pb, str):
            return primitive_to_string(pa) + primitive_to_string(pb)
        return primitive_to_number(pa) + primitive_to_number(pb)

    @staticmethod
    def _require_object(obj: Any, where: str) -> None:
        if not isinstance(obj, JSObject):
            raise JSTypeError(f"{where} called on non-object")


# The canonical realm. Its object_prototype is the default root of every chain.
default_realm = Realm()


def create_object(prototype: Any = UNDEFINED) -> JSObject:
    """Create an empty, extensible object.

    With no argument the object inherits from the default realm's
    Object.prototype; pass None (or NULL) for an object with no prototype.
    """
    if prototype is UNDEFINED:
        prototype = default_realm.object_prototype
    return default_realm.create(prototype)
