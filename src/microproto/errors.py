"""JavaScript error types and exceptions."""


class JSError(Exception):
    """Base class for all object model errors."""

    def __init__(self, message: str = "", name: str = "Error"):
        self.message = message
        self.name = name
        super().__init__(f"{name}: {message}" if message else name)


class JSTypeError(JSError):
    """JavaScript type error."""

    def __init__(self, message: str = ""):
        super().__init__(message, "TypeError")


class TypeConflictError(JSTypeError):
    """Descriptor mixes data fields (value/writable) with accessor fields (get/set)."""

    def __init__(self, name: str = ""):
        self.property_name = name
        super().__init__(
            "Invalid property descriptor. Cannot both specify accessors "
            f"and a value or writable attribute, property '{name}'"
        )


class NotExtensibleError(JSTypeError):
    """A new own property was added to a non-extensible object."""

    def __init__(self, name: str = "", message: str = ""):
        self.property_name = name
        super().__init__(message or f"Cannot define property {name}, object is not extensible")


class NotConfigurableError(JSTypeError):
    """A non-configurable property was altered in a disallowed way."""

    def __init__(self, name: str = ""):
        self.property_name = name
        super().__init__(f"Cannot redefine property: {name}")


class CyclicPrototypeError(JSTypeError):
    """Prototype assignment would make the prototype chain cyclic."""

    def __init__(self, message: str = "Cyclic __proto__ value"):
        super().__init__(message)
