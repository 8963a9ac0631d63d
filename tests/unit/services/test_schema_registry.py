import pytest

from core.exceptions import (
    InvalidFieldConfigError,
    RegistryFrozenError,
    SchemaClassMissingError,
    SchemaNotFoundError,
)
from models.schema import Schema
from services.schema_registry import SchemaRegistry, validate_schema_key
from ticket_fixtures import TicketCollection, TicketSchema


class BrokenChildrenSchema(Schema):
    collection = TicketCollection
    fields = {"replies": {"type": "sortable_children", "sortable_children": {"filterBy": "ticket_id"}}}


class MissingChildrenConfigSchema(Schema):
    collection = TicketCollection
    fields = {"replies": {"type": "sortable_children"}}


@pytest.mark.unit
class TestSchemaRegistry:

    def setup_method(self):
        self.registry = SchemaRegistry()

    def test_register_and_load_class(self):
        """Test registering a schema class."""
        self.registry.register("ticket", TicketSchema)

        assert self.registry.has("ticket")
        assert self.registry.keys() == ["ticket"]
        assert self.registry.load_class("ticket") is TicketSchema

    def test_register_through_schema(self):
        TicketSchema.register("ticket", registry=self.registry)

        assert self.registry.get("ticket") is TicketSchema

    def test_dotted_path_loads_lazily(self):
        """Test that a dotted path is only imported when loaded."""
        self.registry.register("ticket_reply", "ticket_fixtures.TicketReplySchema")

        assert self.registry.get("ticket_reply") == "ticket_fixtures.TicketReplySchema"
        assert self.registry.load_class("ticket_reply").__name__ == "TicketReplySchema"

    def test_missing_class_path(self):
        self.registry.register("ghost", "ticket_fixtures.GhostSchema")

        with pytest.raises(SchemaClassMissingError):
            self.registry.load_class("ghost")

    def test_path_to_non_schema(self):
        self.registry.register("collection", "ticket_fixtures.TicketCollection")

        with pytest.raises(SchemaClassMissingError):
            self.registry.load_class("collection")

    def test_unknown_key(self):
        with pytest.raises(SchemaNotFoundError):
            self.registry.load_class("bogus")

    @pytest.mark.parametrize("key", ["Ticket", "ticket-1", "ticket2", "", "tickét", "ticket\n", "\nticket"])
    def test_invalid_keys_are_rejected(self, key):
        """Test that only lowercase letters and underscores are accepted."""
        with pytest.raises(ValueError):
            self.registry.register(key, TicketSchema)

    def test_valid_key(self):
        assert validate_schema_key("ticket_reply") == "ticket_reply"

    def test_register_rejects_other_objects(self):
        with pytest.raises(TypeError):
            self.registry.register("ticket", 42)

    def test_duplicate_key_latest_wins(self):
        self.registry.register("ticket", "ticket_fixtures.TicketReplySchema")
        self.registry.register("ticket", TicketSchema)

        assert self.registry.get("ticket") is TicketSchema

    def test_invalid_field_config_fails_registration(self):
        """Test that sortable children without an endpoint fail at registration."""
        with pytest.raises(InvalidFieldConfigError, match="endpoint"):
            self.registry.register("broken", BrokenChildrenSchema)
        with pytest.raises(InvalidFieldConfigError):
            self.registry.register("broken", MissingChildrenConfigSchema)

        assert not self.registry.has("broken")

    def test_unregister(self):
        self.registry.register("ticket", TicketSchema)

        self.registry.unregister("ticket")

        assert not self.registry.has("ticket")
        with pytest.raises(SchemaNotFoundError):
            self.registry.unregister("ticket")

    def test_frozen_registry_is_read_only(self):
        """Test that a frozen registry rejects every mutation."""
        self.registry.register("ticket", TicketSchema)
        self.registry.freeze()

        with pytest.raises(RegistryFrozenError):
            self.registry.register("other", TicketSchema)
        with pytest.raises(RegistryFrozenError):
            self.registry.unregister("ticket")
        with pytest.raises(RegistryFrozenError):
            self.registry.clear()
        assert self.registry.load_class("ticket") is TicketSchema

    def test_all_returns_a_copy(self):
        self.registry.register("ticket", TicketSchema)

        self.registry.all().clear()

        assert self.registry.has("ticket")
