"""Single and multi line text field types"""

from typing import Any

from field_types.base_field_type import FieldType, field_type


@field_type("text", "Text", category="text", icon="text")
class TextFieldType(FieldType):
    ui_component = "TextField"


@field_type("email", "Email", category="text", icon="envelope")
class EmailFieldType(TextFieldType):
    ui_component = "EmailField"
    input_type = "email"


@field_type("url", "URL", category="text", icon="link")
class UrlFieldType(TextFieldType):
    ui_component = "LinkField"
    input_type = "url"


@field_type("password", "Password", category="text", icon="lock")
class PasswordFieldType(TextFieldType):
    ui_component = "PasswordField"
    input_type = "password"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        # Stored passwords are never echoed back into markup
        context["value"] = ""
        return context


@field_type("color", "Color", category="text", icon="palette")
class ColorFieldType(TextFieldType):
    ui_component = "ColorPickerField"
    input_type = "color"


@field_type("textarea", "Textarea", category="text", icon="align-left")
class TextareaFieldType(FieldType):
    ui_component = "TextareaField"
    template = "fields/textarea.html"
    column_type = "TEXT"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        context["rows"] = field.attributes.rows or 5
        return context


@field_type("hidden", "Hidden", category="text", icon="eye-slash")
class HiddenFieldType(TextFieldType):
    ui_component = "HiddenField"
    template = "fields/hidden.html"
    input_type = "hidden"


@field_type("readonly", "Read Only", category="text", icon="eye")
class ReadOnlyFieldType(TextFieldType):
    ui_component = "ReadOnlyField"
    template = "fields/readonly.html"
