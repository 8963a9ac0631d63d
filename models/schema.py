"""Schema - a declared form over a collection.

A schema names the collection it wraps and overrides the attributes of some
of its fields; every fillable field that is not overridden falls back to the
defaults inferred from its cast and name::

    class TicketSchema(Schema):
        collection = TicketCollection
        fields = {
            "priority": {"type": "select", "options": ["low", "high"]},
            "description": FieldDefinition.create("textarea", "description").required(),
        }

    TicketSchema.register("ticket")
"""

from typing import Any, ClassVar, Mapping, Optional

from field_types.field import FieldDefinition


class Schema:
    collection: ClassVar[Any] = None
    fields: ClassVar[Mapping[str, Mapping[str, Any] | FieldDefinition]] = {}

    def get_collection_ref(self) -> Any:
        """Collection class, dotted path to one, or None."""
        return self.collection

    def get_field_overrides(self) -> dict[str, dict[str, Any]]:
        overrides = {}
        for key, field in (self.fields or {}).items():
            if isinstance(field, FieldDefinition):
                overrides[key] = field.as_override()
            else:
                overrides[key] = dict(field)
        return overrides

    @classmethod
    def check_fields(cls) -> list[FieldDefinition]:
        """Build and freeze every declared field, failing on invalid configuration.

        Raises InvalidFieldConfigError for the first field whose attributes
        are invalid (for example a sortable_children field without an
        endpoint).
        """
        definitions = []
        for key, field in (cls.fields or {}).items():
            if not isinstance(field, FieldDefinition):
                field = FieldDefinition.from_attributes(key, field)
            definitions.append(field.freeze())
        return definitions

    @classmethod
    def register(cls, key: str, registry: Optional[Any] = None) -> None:
        if registry is None:
            from services.schema_registry import get_schema_registry
            registry = get_schema_registry()
        registry.register(key, cls)
