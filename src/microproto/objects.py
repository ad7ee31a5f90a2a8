"""JavaScript objects: descriptor-controlled properties and prototype chains."""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from .errors import (
    CyclicPrototypeError,
    JSTypeError,
    NotConfigurableError,
    NotExtensibleError,
)
from .properties import (
    AccessorProperty,
    DataProperty,
    Property,
    PropertyDescriptor,
    to_property_descriptor,
)
from .values import NULL, UNDEFINED, JSValue, same_value

logger = logging.getLogger(__name__)


class PropertyNames:
    """A lazy, restartable view of property names.

    Every iteration re-reads the object's current state, like a dict view.
    """

    def __init__(self, source: Callable[[], Iterator[str]]):
        self._source = source

    def __iter__(self) -> Iterator[str]:
        return self._source()

    def __contains__(self, name: object) -> bool:
        return any(n == name for n in self)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyNames):
            return list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"PropertyNames({list(self)})"


class JSObject:
    """JavaScript object."""

    def __init__(self, prototype: Optional["JSObject"] = None):
        self._properties: Dict[str, Property] = {}
        self._prototype: Optional[JSObject] = None
        self._extensible = True
        if prototype is not None:
            self.set_prototype(prototype)

    # -- prototype chain ---------------------------------------------------

    @property
    def prototype(self) -> Optional["JSObject"]:
        return self._prototype

    @prototype.setter
    def prototype(self, value: Optional["JSObject"]) -> None:
        self.set_prototype(value)

    def set_prototype(self, prototype: Optional["JSObject"]) -> None:
        """Replace the prototype, rejecting cycles and changes to closed objects."""
        if prototype is NULL:
            prototype = None
        if prototype is not None and not isinstance(prototype, JSObject):
            raise JSTypeError(f"Object prototype may only be an Object or null: {prototype!r}")
        if prototype is self._prototype:
            return
        if not self._extensible:
            raise NotExtensibleError(message="Cannot set prototype of a non-extensible object")
        proto = prototype
        while proto is not None:
            if proto is self:
                raise CyclicPrototypeError()
            proto = proto._prototype
        logger.debug("Prototype of %r changed to %r", self, prototype)
        self._prototype = prototype

    def chain(self) -> Iterator["JSObject"]:
        """Yield this object and then each prototype outward."""
        obj: Optional[JSObject] = self
        while obj is not None:
            yield obj
            obj = obj._prototype

    def is_prototype_of(self, other: Any) -> bool:
        """Check if this object appears in the prototype chain of other."""
        if not isinstance(other, JSObject):
            return False
        proto = other._prototype
        while proto is not None:
            if proto is self:
                return True
            proto = proto._prototype
        return False

    def find_property(self, key: str) -> Optional[Property]:
        """Find the nearest property named key along the prototype chain."""
        for obj in self.chain():
            prop = obj._properties.get(key)
            if prop is not None:
                return prop
        return None

    # -- queries -----------------------------------------------------------

    def get_own_property(self, key: str) -> Optional[Property]:
        """Return the own property record, ignoring the prototype chain."""
        return self._properties.get(key)

    def has_own_property(self, key: str) -> bool:
        """Check if object has own property."""
        return key in self._properties

    def has_property(self, key: str) -> bool:
        """Check if key resolves on this object or anywhere up its chain."""
        return self.find_property(key) is not None

    def __contains__(self, key: str) -> bool:
        return self.has_property(key)

    def is_enumerable_own(self, key: str) -> bool:
        prop = self._properties.get(key)
        return prop is not None and prop.enumerable

    # -- get / set -----------------------------------------------------------

    def get(self, key: str, receiver: Any = None) -> JSValue:
        """Get a property value, invoking getters with the original receiver as this."""
        if receiver is None:
            receiver = self
        prop = self.find_property(key)
        if prop is None:
            return UNDEFINED
        if isinstance(prop, AccessorProperty):
            if prop.getter is None:
                return UNDEFINED
            return prop.getter(receiver)
        return prop.value

    def set(self, key: str, value: JSValue, receiver: Optional["JSObject"] = None) -> bool:
        """Assign a property value with non-strict semantics.

        Returns False when the write was silently ignored: a non-writable own
        data property, an accessor without a setter, or a new name on a
        non-extensible receiver. Inherited data properties are shadowed on
        the receiver and never modified, whatever their writability.
        """
        if receiver is None:
            receiver = self
        prop = self.find_property(key)
        if isinstance(prop, AccessorProperty):
            if prop.setter is None:
                logger.debug("Ignored write to %r: accessor has no setter", key)
                return False
            prop.setter(receiver, value)
            return True
        own = receiver._properties.get(key)
        if isinstance(own, DataProperty):
            if not own.writable:
                logger.debug("Ignored write to read-only property %r", key)
                return False
            receiver._properties[key] = replace(own, value=value)
            return True
        if own is not None:
            # receiver's own accessor wins over whatever self's chain resolved
            return receiver.set(key, value)
        if not receiver._extensible:
            logger.debug("Ignored write of new property %r on non-extensible object", key)
            return False
        receiver._properties[key] = DataProperty(
            value=value, writable=True, enumerable=True, configurable=True
        )
        return True

    # -- define / delete -----------------------------------------------------

    def define_property(self, key: str, descriptor: Any) -> None:
        """Create or reconfigure an own property from a (partial) descriptor.

        Omitted fields default to False/absent for new properties and keep
        their current values for existing ones.
        """
        desc = to_property_descriptor(descriptor)
        desc.validate(key)
        current = self._properties.get(key)
        if current is None:
            if not self._extensible:
                raise NotExtensibleError(key)
            self._properties[key] = desc.to_property()
            return
        if not current.configurable:
            self._check_locked_change(key, current, desc)
        self._properties[key] = self._merge(current, desc)

    def define_properties(self, descriptors: Any) -> None:
        """Define several properties; descriptors maps names to descriptors."""
        if isinstance(descriptors, JSObject):
            items = [(k, descriptors.get(k)) for k in descriptors.own_enumerable_names()]
        else:
            items = list(descriptors.items())
        # All descriptors are validated before any property is defined
        resolved = [(k, to_property_descriptor(d)) for k, d in items]
        for key, desc in resolved:
            desc.validate(key)
        for key, desc in resolved:
            self.define_property(key, desc)

    @staticmethod
    def _check_locked_change(key: str, current: Property, desc: PropertyDescriptor) -> None:
        if desc.has("configurable") and desc.configurable:
            raise NotConfigurableError(key)
        if desc.has("enumerable") and desc.enumerable != current.enumerable:
            raise NotConfigurableError(key)
        if desc.is_generic_descriptor():
            return
        if isinstance(current, DataProperty):
            if desc.is_accessor_descriptor():
                raise NotConfigurableError(key)
            if desc.has("writable") and desc.writable != current.writable:
                raise NotConfigurableError(key)
            if desc.has("value") and not same_value(desc.value, current.value):
                if not current.writable:
                    raise NotConfigurableError(key)
            return
        if desc.is_data_descriptor():
            raise NotConfigurableError(key)
        if desc.has("get") and desc.get is not current.getter:
            raise NotConfigurableError(key)
        if desc.has("set") and desc.set is not current.setter:
            raise NotConfigurableError(key)

    @staticmethod
    def _merge(current: Property, desc: PropertyDescriptor) -> Property:
        enumerable = desc.enumerable if desc.has("enumerable") else current.enumerable
        configurable = desc.configurable if desc.has("configurable") else current.configurable
        if isinstance(current, DataProperty) and not desc.is_accessor_descriptor():
            return DataProperty(
                value=desc.value if desc.has("value") else current.value,
                writable=desc.writable if desc.has("writable") else current.writable,
                enumerable=enumerable,
                configurable=configurable,
            )
        if isinstance(current, AccessorProperty) and not desc.is_data_descriptor():
            return AccessorProperty(
                getter=desc.get if desc.has("get") else current.getter,
                setter=desc.set if desc.has("set") else current.setter,
                enumerable=enumerable,
                configurable=configurable,
            )
        # Kind switch: keep enumerable/configurable, reset everything else
        return replace(desc.to_property(), enumerable=enumerable, configurable=configurable)

    def delete_property(self, key: str) -> bool:
        """Delete a configurable own property. Inherited properties are never touched."""
        prop = self._properties.get(key)
        if prop is None:
            return False
        if not prop.configurable:
            logger.debug("Ignored delete of non-configurable property %r", key)
            return False
        del self._properties[key]
        return True

    # -- enumeration ---------------------------------------------------------

    def own_property_names(self) -> List[str]:
        """All own property names, enumerable or not, in insertion order."""
        return list(self._properties)

    def own_enumerable_names(self) -> PropertyNames:
        """Own enumerable property names in insertion order (Object.keys)."""

        def iterate() -> Iterator[str]:
            for key in list(self._properties):
                prop = self._properties.get(key)
                if prop is not None and prop.enumerable:
                    yield key

        return PropertyNames(iterate)

    def visible_enumerable_names(self) -> PropertyNames:
        """Enumerable names along the whole chain, nearest occurrence wins (for-in)."""

        def iterate() -> Iterator[str]:
            seen = set()
            for obj in self.chain():
                for key in list(obj._properties):
                    prop = obj._properties.get(key)
                    if prop is None or key in seen:
                        continue
                    seen.add(key)
                    if prop.enumerable:
                        yield key

        return PropertyNames(iterate)

    # -- integrity levels ------------------------------------------------------

    @property
    def extensible(self) -> bool:
        return self._extensible

    def prevent_extensions(self) -> None:
        """Forbid adding new own properties. Irreversible."""
        if self._extensible:
            logger.debug("Preventing extensions on %r", self)
        self._extensible = False

    def seal(self) -> None:
        self.prevent_extensions()
        for key, prop in list(self._properties.items()):
            self._properties[key] = replace(prop, configurable=False)

    def freeze(self) -> None:
        self.seal()
        for key, prop in list(self._properties.items()):
            if isinstance(prop, DataProperty):
                self._properties[key] = replace(prop, writable=False)

    def is_sealed(self) -> bool:
        if self._extensible:
            return False
        return all(not prop.configurable for prop in self._properties.values())

    def is_frozen(self) -> bool:
        if not self.is_sealed():
            return False
        return all(
            not prop.writable
            for prop in self._properties.values()
            if isinstance(prop, DataProperty)
        )

    def __repr__(self) -> str:
        return f"JSObject({self.own_property_names()})"
