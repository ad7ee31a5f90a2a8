"""Function objects, constructors and instanceof."""

from typing import Any, Callable, Optional, Sequence

from .errors import JSTypeError
from .objects import JSObject
from .values import UNDEFINED, JSValue


class JSFunction(JSObject):
    """JavaScript function: an object that is also callable.

    The body is a Python callable that expects 'this' as the first argument,
    so a JSFunction can be used directly as a getter or setter.
    """

    def __init__(
        self,
        name: str,
        body: Callable[..., JSValue],
        prototype: Optional[JSObject] = None,
    ):
        super().__init__(prototype)
        self._body = body
        self.define_property("name", {"value": name, "configurable": True})

    @property
    def name(self) -> str:
        """The current value of the own or inherited name property."""
        name = self.get("name")
        return name if isinstance(name, str) else ""

    def __call__(self, this_val: Any = UNDEFINED, *args: Any) -> JSValue:
        result = self._body(this_val, *args)
        return UNDEFINED if result is None else result

    def call(self, this_val: Any = UNDEFINED, *args: Any) -> JSValue:
        """Function.prototype.call: run the body with an explicit this."""
        return self(this_val, *args)

    def apply(self, this_val: Any = UNDEFINED, args: Optional[Sequence[Any]] = None) -> JSValue:
        """Function.prototype.apply: like call, with the arguments as a sequence."""
        return self(this_val, *(args or ()))

    def __repr__(self) -> str:
        return f"[Function: {self.name}]" if self.name else "[Function (anonymous)]"


def construct(constructor: Any, args: Sequence[Any], fallback_prototype: JSObject) -> JSObject:
    """Run constructor the way ``new`` does.

    The new object inherits from ``constructor.prototype`` when that is an
    object, otherwise from fallback_prototype. If the body returns an object,
    that object is the result instead.
    """
    if not isinstance(constructor, JSFunction):
        raise JSTypeError(f"{constructor!r} is not a constructor")
    proto = constructor.get("prototype")
    if not isinstance(proto, JSObject):
        proto = fallback_prototype
    this = JSObject(proto)
    result = constructor(this, *args)
    if isinstance(result, JSObject):
        return result
    return this


def instance_of(value: Any, constructor: Any) -> bool:
    """Check if constructor.prototype appears in value's prototype chain."""
    if not isinstance(constructor, JSFunction):
        raise JSTypeError("Right-hand side of 'instanceof' is not callable")
    if not isinstance(value, JSObject):
        return False
    proto = constructor.get("prototype")
    if not isinstance(proto, JSObject):
        raise JSTypeError("Function has non-object prototype in instanceof check")
    return proto.is_prototype_of(value)
