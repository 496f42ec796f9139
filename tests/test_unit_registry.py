"""Unit tests for the DataMod registry."""

import pytest

from datamod import DataMod, registry
from datamod.core.errors import UnknownEntityError
from tests.entities import Status, User


class TestRegistry:
    def test_entities_register_by_class_name(self):
        """Test that defining a DataMod registers it under its class name."""
        assert registry.get_entity("User") is User
        assert registry.get_entity("Status") is Status

    def test_base_classes_are_not_registered(self):
        """Test that DataMod and BaseProvider themselves are not registered."""
        assert registry.find_entity("DataMod") is None
        assert registry.find_entity("BaseProvider") is None

    def test_unknown_entity(self):
        """Test that an unknown name raises and lists the registered entities."""
        with pytest.raises(UnknownEntityError) as exc_info:
            registry.get_entity("Invoice")

        assert "User" in exc_info.value.details["registered"]

    def test_subclass_without_table_not_registered(self):
        """Test that an intermediate subclass without a table is skipped."""
        class Mixin(DataMod):
            pass

        assert registry.find_entity("Mixin") is None

    def test_register_and_unregister(self):
        """Test that an entity can be removed from the registry again."""
        class Invoice(DataMod):
            @classmethod
            def get_base_table(cls) -> str:
                return "invoice"

            @classmethod
            def get_data_mapping(cls) -> dict[str, str]:
                return {"id": "id"}

        assert "Invoice" in registry.registered_entities()

        registry.unregister_entity("Invoice")
        assert registry.find_entity("Invoice") is None
