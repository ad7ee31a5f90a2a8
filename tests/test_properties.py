"""Tests for property records and descriptors."""

import pytest

from microproto import (
    UNDEFINED,
    AccessorProperty,
    DataProperty,
    JSObject,
    JSTypeError,
    PropertyDescriptor,
    TypeConflictError,
)
from microproto.properties import MISSING, to_property_descriptor


class TestPropertyDescriptor:
    """Test partial descriptors."""

    def test_missing_fields(self):
        """Fields not supplied are MISSING."""
        desc = PropertyDescriptor(value=1)
        assert desc.has("value")
        assert not desc.has("writable")
        assert desc.writable is MISSING

    def test_kinds(self):
        assert PropertyDescriptor(value=1).is_data_descriptor()
        assert PropertyDescriptor(get=None).is_accessor_descriptor()
        assert PropertyDescriptor(enumerable=True).is_generic_descriptor()

    def test_undefined_getter_is_supplied_but_absent(self):
        """An explicit undefined getter still makes an accessor descriptor."""
        desc = PropertyDescriptor(get=UNDEFINED)
        assert desc.has("get")
        assert desc.get is None

    def test_booleans_are_coerced(self):
        desc = PropertyDescriptor(enumerable=1, configurable="")
        assert desc.enumerable is True
        assert desc.configurable is False

    def test_non_callable_getter_rejected(self):
        with pytest.raises(JSTypeError):
            PropertyDescriptor(get=42)

    def test_mixed_descriptor_rejected(self):
        desc = PropertyDescriptor(value=1, get=lambda this: 2)
        with pytest.raises(TypeConflictError):
            desc.validate("x")

    def test_to_property_defaults_to_false(self):
        """Omitted booleans default to False for explicitly defined properties."""
        prop = PropertyDescriptor(value="Yukihiro Matsumoto").to_property()
        assert prop == DataProperty("Yukihiro Matsumoto", False, False, False)

    def test_to_property_accessor(self):
        getter = lambda this: 1
        prop = PropertyDescriptor(get=getter).to_property()
        assert isinstance(prop, AccessorProperty)
        assert prop.getter is getter
        assert prop.setter is None
        assert prop.enumerable is False

    def test_to_dict(self):
        desc = DataProperty("Daniel Edwin Carey", True, True, True).to_descriptor()
        assert desc.to_dict() == {
            "value": "Daniel Edwin Carey",
            "writable": True,
            "enumerable": True,
            "configurable": True,
        }

    def test_accessor_to_dict_reports_absent_setter_as_undefined(self):
        getter = lambda this: 1
        desc = AccessorProperty(getter=getter).to_descriptor()
        assert desc.to_dict() == {
            "get": getter,
            "set": UNDEFINED,
            "enumerable": False,
            "configurable": False,
        }


class TestCoercion:
    """Test to_property_descriptor."""

    def test_mapping(self):
        desc = to_property_descriptor({"value": 1, "enumerable": True, "other": 5})
        assert desc.value == 1
        assert desc.enumerable is True
        assert not desc.has("writable")

    def test_descriptor_passthrough(self):
        desc = PropertyDescriptor(value=1)
        assert to_property_descriptor(desc) is desc

    def test_js_object(self):
        """Descriptor objects may inherit fields from their prototype."""
        base = JSObject()
        base.set("enumerable", True)
        source = JSObject(base)
        source.set("value", "Neuromancer")
        desc = to_property_descriptor(source)
        assert desc.value == "Neuromancer"
        assert desc.enumerable is True
        assert not desc.has("configurable")

    def test_rejects_primitives(self):
        with pytest.raises(JSTypeError):
            to_property_descriptor(5)
