import pytest

from core.exceptions import SchemaClassMissingError, SchemaNotFoundError
from field_types.kinds import FieldKind
from services.schema_resolver import SchemaResolver, default_attributes, infer_field_type
from ticket_fixtures import TICKET_ENDPOINT, TICKET_FILLABLE


@pytest.mark.unit
class TestInferFieldType:

    @pytest.mark.parametrize("key,cast,expected", [
        ("is_active", "boolean", FieldKind.CHECKBOX),
        ("total", "decimal:2", FieldKind.NUMBER),
        ("count", "integer", FieldKind.NUMBER),
        ("due_at", "datetime", FieldKind.DATETIME),
        ("due_on", "date", FieldKind.DATE),
        ("contact_email", None, FieldKind.EMAIL),
        ("website", None, FieldKind.URL),
        ("profile_url", None, FieldKind.URL),
        ("password", None, FieldKind.PASSWORD),
        ("title", None, FieldKind.TEXT),
        ("options", "array", FieldKind.TEXT),
    ])
    def test_inference(self, key, cast, expected):
        """Test type inference from casts and field names."""
        assert infer_field_type(key, cast) is expected

    def test_cast_wins_over_name(self):
        assert infer_field_type("email_count", "integer") is FieldKind.NUMBER

    def test_default_attributes(self):
        assert default_attributes("assigned_to", "integer") == {
            "type": "number",
            "label": "Assigned To",
            "required": False,
            "hidden": False,
        }


@pytest.mark.unit
class TestSchemaResolver:

    def test_fields_follow_fillable_order(self, ticket_schema):
        """Test that resolved fields are the fillable columns, in order."""
        assert list(ticket_schema.fields) == TICKET_FILLABLE
        assert ticket_schema.fillable == TICKET_FILLABLE

    def test_overrides_are_merged_over_defaults(self, ticket_schema):
        """Test that declared attributes replace inferred ones."""
        assert ticket_schema.fields["title"] == {
            "type": "text",
            "label": "Title",
            "required": True,
            "hidden": False,
            "maxLength": 120,
        }
        assert ticket_schema.fields["description"]["type"] == "textarea"
        assert ticket_schema.fields["description"]["required"] is True
        assert ticket_schema.fields["priority"]["options"] == ["low", "medium", "high", "urgent"]

    def test_fields_without_override_are_inferred(self, ticket_schema):
        assert ticket_schema.fields["assigned_to"]["type"] == "number"
        assert ticket_schema.fields["contact_email"] == {
            "type": "email",
            "label": "Contact Email",
            "required": False,
            "hidden": False,
        }

    def test_collection_metadata(self, ticket_schema):
        """Test model, route and config metadata of the collection."""
        collection = ticket_schema.collection

        assert ticket_schema.key == "ticket"
        assert ticket_schema.name == "TicketSchema"
        assert ticket_schema.class_name == "ticket_fixtures.TicketSchema"
        assert ticket_schema.degraded is False
        assert collection.class_name == "ticket_fixtures.TicketCollection"
        assert collection.model.class_name == "ticket_fixtures.Ticket"
        assert collection.model.table == "tickets"
        assert collection.model.casts == {
            "assigned_to": "integer",
            "created_at": "datetime",
            "updated_at": "datetime",
        }
        assert collection.routes.namespace == "arc-gateway/v1"
        assert collection.routes.route == "tickets"
        assert collection.routes.methods["delete"] is False
        assert collection.routes.methods["get_many"] is True
        assert collection.config["per_page"] == 15
        assert collection.config["filterable"] == ["status", "priority"]
        assert ticket_schema.endpoint == TICKET_ENDPOINT

    def test_lazy_collection_and_model(self, resolver):
        """Test dotted collection and model references."""
        resolved = resolver.resolve("ticket_reply")

        assert resolved.collection.model.table == "ticket_replies"
        assert resolved.collection.routes.route == "ticket_replies"
        assert resolved.fields["ticket_id"]["type"] == "relation"
        assert resolved.fields["message"]["required"] is True

    def test_unloadable_collection_degrades(self, resolver):
        """Test that a missing collection yields the raw overrides only."""
        resolved = resolver.resolve("orphan")

        assert resolved.degraded is True
        assert resolved.collection.model is None
        assert resolved.endpoint is None
        assert resolved.fields == {"note": {"type": "textarea", "label": "Note"}}
        assert resolved.fillable == ["note"]

    def test_unknown_schema(self, resolver):
        with pytest.raises(SchemaNotFoundError):
            resolver.resolve("bogus")

    def test_missing_schema_class(self, schema_registry):
        schema_registry.register("ghost", "ticket_fixtures.GhostSchema")

        with pytest.raises(SchemaClassMissingError):
            SchemaResolver(schema_registry).resolve("ghost")

    def test_resolve_all_skips_missing_classes(self, schema_registry):
        """Test listing skips schemas whose class cannot be loaded."""
        schema_registry.register("ghost", "ticket_fixtures.GhostSchema")

        summaries = {s.key: s for s in SchemaResolver(schema_registry).resolve_all()}

        assert set(summaries) == {"ticket", "ticket_reply", "orphan"}
        assert summaries["ticket"].table == "tickets"
        assert summaries["ticket"].field_count == 6
        assert summaries["ticket"].endpoint == TICKET_ENDPOINT
        assert summaries["orphan"].degraded is True
        assert summaries["orphan"].table is None

    def test_resolution_is_repeatable(self, resolver):
        assert resolver.resolve("ticket") == resolver.resolve("ticket")
