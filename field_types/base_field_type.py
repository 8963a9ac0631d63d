"""Base class for field types.

A field type owns everything that differs between kinds of input: the markup
it renders, the rules its values are validated with, the storage column it
maps to and the input config handed to client renderers. Field types are
stateless; the field being processed is always passed in.
"""

from typing import TYPE_CHECKING, Any, Optional

from markupsafe import Markup

from core.templating import render_template
from field_types.rules import ValidationRules, iter_failures

if TYPE_CHECKING:
    from field_types.field import FieldDefinition


def field_type(handle: str, label: str, category: str = "general", icon: Optional[str] = None):
    """Class decorator that marks a FieldType subclass as loadable by the registry"""
    def decorator(cls):
        cls.handle = handle
        cls.label = label
        cls._field_type_category = category
        cls._field_type_icon = icon
        return cls
    return decorator


class FieldType:
    handle: str = ""
    label: str = ""
    ui_component: str = "TextField"
    template: str = "fields/input.html"
    input_type: str = "text"
    version: str = "1.0.0"

    # Base storage type, None for virtual fields that own no column
    column_type: Optional[str] = "VARCHAR"

    def render(self, field: "FieldDefinition", value: Any = None) -> Markup:
        return render_template(self.template, **self.get_render_context(field, value))

    def validate(self, field: "FieldDefinition", value: Any) -> list[str]:
        return [
            failure.message
            for failure in iter_failures(
                field.get_label(),
                field.type,
                field.is_required(),
                self.get_validation_rules(field),
                value,
            )
        ]

    def column_definition(self, field: "FieldDefinition") -> Optional[str]:
        """Column SQL for this field, or None when no column is needed."""
        column_type = self.get_column_type(field)
        if column_type is None:
            return None

        parts = [f"`{field.key}`", column_type]
        parts.append("NOT NULL" if field.is_required() else "NULL")

        default = field.attributes.default
        if default is not None:
            parts.append(f"DEFAULT {self.format_default(default)}")

        return " ".join(parts)

    def get_column_type(self, field: "FieldDefinition") -> Optional[str]:
        if self.column_type == "VARCHAR":
            return f"VARCHAR({field.attributes.max_length or 255})"
        return self.column_type

    @staticmethod
    def format_default(default: Any) -> str:
        if isinstance(default, bool):
            return "1" if default else "0"
        if isinstance(default, (int, float)):
            return str(default)
        escaped = str(default).replace("'", "''")
        return f"'{escaped}'"

    def check_declaration(self, field: "FieldDefinition") -> None:
        """Raise InvalidFieldConfigError when a declared field cannot work."""

    def get_validation_rules(self, field: "FieldDefinition") -> ValidationRules:
        return ValidationRules.from_attributes(field.attributes)

    def get_render_context(self, field: "FieldDefinition", value: Any = None) -> dict[str, Any]:
        attributes = field.attributes
        if value is None:
            value = attributes.default
        return {
            "key": field.key,
            "field_type": field.type,
            "input_type": self.input_type,
            "label": field.get_label(),
            "required": field.is_required(),
            "placeholder": attributes.placeholder or "",
            "help_text": attributes.help_text or "",
            "append": attributes.append,
            "prepend": attributes.prepend,
            "value": "" if value is None else value,
            "attributes": attributes,
        }

    def get_form_input_config(self, field: "FieldDefinition") -> dict[str, Any]:
        """Component + props a client renderer needs to draw this field"""
        attributes = field.attributes
        props = {
            "label": field.get_label(),
            "required": field.is_required(),
            "placeholder": attributes.placeholder,
            "helpText": attributes.help_text,
            "inputType": self.input_type,
        }
        return {
            "component": self.ui_component,
            "props": {name: value for name, value in props.items() if value is not None},
        }
