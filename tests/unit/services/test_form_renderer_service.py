import json
import re

import pytest

from services.form_renderer_service import DEFAULT_OPTIONS, FormRendererService
from ticket_fixtures import TICKET_ENDPOINT


def form_config(html: str) -> dict:
    match = re.search(r'<script type="application/json" class="arc-form-config"[^>]*>(.*?)</script>', html, re.S)
    return json.loads(match.group(1))


@pytest.mark.unit
class TestFormRendererService:

    @pytest.fixture(autouse=True)
    def _renderer(self, resolver, field_type_registry):
        self.renderer = FormRendererService(resolver, field_type_registry)

    def test_form_config(self, ticket_schema):
        """Test the controller config built for the ticket form."""
        config = self.renderer.build_form_config(ticket_schema, nonce="abc123")

        assert config["formId"] == "arc-ticket-form"
        assert config["endpoint"] == TICKET_ENDPOINT
        assert config["nonce"] == "abc123"
        assert config["options"] == DEFAULT_OPTIONS
        assert [field["name"] for field in config["fields"]] == list(ticket_schema.fields)
        assert config["fields"][0] == {
            "name": "title",
            "type": "text",
            "label": "Title",
            "required": True,
            "validation": {"max_length": 120},
        }

    def test_options_are_merged(self, ticket_schema):
        config = self.renderer.build_form_config(ticket_schema, options={"redirectOnSuccess": "/thanks"})

        assert config["options"]["redirectOnSuccess"] == "/thanks"
        assert config["options"]["method"] == "POST"

    def test_render_lists_fields_in_order(self, ticket_schema):
        """Test that the static form renders every field in fillable order."""
        html = str(self.renderer.render(ticket_schema))

        positions = [html.index(f'name="{key}"') for key in ticket_schema.fields]
        assert positions == sorted(positions)
        assert 'class="arc-form-js"' in html
        assert f'action="{TICKET_ENDPOINT}"' in html
        assert form_config(html)["formId"] == "arc-ticket-form"

    def test_hidden_fields_are_not_rendered(self, field_type_registry, ticket_schema):
        fields = dict(ticket_schema.fields)
        fields["status"] = {**fields["status"], "hidden": True}
        resolved = ticket_schema.model_copy(update={"fields": fields})

        html = str(self.renderer.render(resolved))

        assert 'name="status"' not in html
        assert "status" not in [field["name"] for field in form_config(html)["fields"]]

    def test_create_page(self):
        """Test the create page wording and options."""
        html = str(self.renderer.render_form("create", "ticket"))
        config = form_config(html)

        assert "<h1>Create Ticket</h1>" in html
        assert ">Create</button>" in html
        assert 'data-submitting-text="Creating..."' in html
        assert config["options"]["successMessage"] == "Create successful!"
        assert config["options"]["resetOnSuccess"] is True
        assert config["endpoint"] == TICKET_ENDPOINT

    def test_edit_page_prefills_and_puts(self):
        """Test that edit mode targets the record and pre-fills values."""
        html = str(self.renderer.render_form(
            "edit", "ticket", data={"title": "Printer jam"}, record_id=2, title="Edit ticket #2",
        ))
        config = form_config(html)

        assert "<h1>Edit ticket #2</h1>" in html
        assert 'value="Printer jam"' in html
        assert config["endpoint"] == f"{TICKET_ENDPOINT}/2"
        assert config["options"]["method"] == "PUT"
        assert config["options"]["resetOnSuccess"] is False
        assert config["options"]["submittingText"] == "Updating..."

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            self.renderer.render_form("delete", "ticket")

    def test_schema_without_fields(self, schema_registry):
        """Test the message for a schema with no fields."""
        from models.schema import Schema

        class EmptySchema(Schema):
            collection = "ticket_fixtures.MissingCollection"

        schema_registry.register("empty", EmptySchema)

        html = str(self.renderer.render_form("create", "empty"))

        assert "No fields defined for empty collection." in html

    def test_mount_point(self):
        html = str(self.renderer.render_mount_point("ticket", record_id=2, attributes={"class": "wide"}))

        assert 'class="wide"' in html
        assert 'data-schema="ticket"' in html
        assert 'data-record-id="2"' in html
        assert 'data-schema-endpoint="/api/v1/blueprint/schemas/ticket"' in html

    def test_mount_point_without_record(self):
        assert "data-record-id" not in str(self.renderer.render_mount_point("ticket"))

    def test_shortcode(self):
        """Test the shortcode attributes map onto the mount point."""
        html = str(self.renderer.render_shortcode({"schema": "ticket", "record_id": "7", "id": "support"}))

        assert 'id="support"' in html
        assert 'data-record-id="7"' in html

    def test_shortcode_without_schema(self):
        html = str(self.renderer.render_shortcode({}))

        assert "Blueprint Form Error:" in html
        assert "No schema specified." in html
