"""Sortable children: an ordered list of child records of the current record.

The children are managed through their own collection endpoint, so the field
owns no column and never contributes errors to the parent form.
"""

from typing import Any, Optional

from core.exceptions import InvalidFieldConfigError
from field_types.base_field_type import FieldType, field_type


@field_type("sortable_children", "Sortable Children", category="relational", icon="arrow-down-short-wide")
class SortableChildrenFieldType(FieldType):
    ui_component = "SortableChildrenField"
    template = "fields/sortable_children.html"
    column_type = None

    def check_declaration(self, field) -> None:
        if field.attributes.sortable_children is None:
            raise InvalidFieldConfigError(
                f"Field '{field.key}': sortable_children requires an endpoint and a filterBy parameter"
            )

    def validate(self, field, value: Any) -> list[str]:
        return []

    def column_definition(self, field) -> Optional[str]:
        return None

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        config = field.attributes.sortable_children
        context["config"] = config.model_dump(by_alias=True) if config else {}
        return context

    def get_form_input_config(self, field) -> dict[str, Any]:
        config = super().get_form_input_config(field)
        children = field.attributes.sortable_children
        config["props"]["config"] = children.model_dump(by_alias=True) if children else {}
        return config
