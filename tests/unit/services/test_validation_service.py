import pytest

from services.validation_service import build_field_definitions, validate_collection


@pytest.mark.unit
class TestValidationService:

    def test_missing_title_only_reports_title(self, ticket_schema, field_type_registry):
        """Test an empty required title with a valid description."""
        errors = validate_collection(ticket_schema, {"title": "", "description": "x"}, field_type_registry)

        assert errors == {"title": ["Title is required"]}

    def test_invalid_email_only_reports_email(self, ticket_schema, field_type_registry):
        """Test that only the malformed email fails."""
        data = {"title": "Printer jam", "description": "Paper stuck", "contact_email": "not-an-email"}

        errors = validate_collection(ticket_schema, data, field_type_registry)

        assert errors == {"contact_email": ["Contact Email must be a valid email"]}

    def test_valid_payload_has_no_errors(self, ticket_schema, field_type_registry, ticket_payload):
        assert validate_collection(ticket_schema, ticket_payload, field_type_registry) == {}

    def test_all_failures_are_reported(self, field_type_registry):
        """Test that the server reports every failing rule of a field."""
        fields = {"code": {"type": "email", "label": "Code", "minLength": 30, "pattern": r"^\d+$"}}

        errors = validate_collection(fields, {"code": "abc"}, field_type_registry)

        assert errors == {"code": [
            "Code must be at least 30 characters",
            "Code format is invalid",
            "Code must be a valid email",
        ]}

    def test_hidden_fields_are_validated(self, field_type_registry):
        fields = {"token": {"type": "hidden", "required": True, "hidden": True}}

        assert validate_collection(fields, {}, field_type_registry) == {"token": ["Token is required"]}

    def test_sortable_children_contribute_nothing(self, field_type_registry):
        """Test that virtual fields never produce errors."""
        fields = {
            "replies": {
                "type": "sortable_children",
                "required": True,
                "sortable_children": {"endpoint": "arc-gateway/v1/ticket_replies", "filterBy": "ticket_id"},
            },
        }

        assert validate_collection(fields, {}, field_type_registry) == {}

    def test_required_zero_is_reported_missing(self, field_type_registry):
        """Test that a required number rejects 0."""
        fields = {"qty": {"type": "number", "required": True}}

        assert validate_collection(fields, {"qty": 0}, field_type_registry) == {"qty": ["Qty is required"]}

    def test_optional_zero_is_range_checked(self, field_type_registry):
        fields = {"qty": {"type": "number", "min": 1}}

        assert validate_collection(fields, {"qty": 0}, field_type_registry) == {"qty": ["Qty must be at least 1"]}

    def test_value_outside_options_is_accepted(self, field_type_registry):
        fields = {"priority": {"type": "select", "options": ["low", "high"]}}

        assert validate_collection(fields, {"priority": "critical"}, field_type_registry) == {}

    def test_build_field_definitions_keeps_order(self, ticket_schema, field_type_registry):
        definitions = build_field_definitions(ticket_schema, field_type_registry)

        assert [field.key for field in definitions] == list(ticket_schema.fields)
        assert definitions[1].type == "textarea"
