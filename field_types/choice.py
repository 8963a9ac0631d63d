"""Choice field types: select, radio, button group and checkbox"""

from typing import Any

from field_types.base_field_type import FieldType, field_type


@field_type("select", "Select", category="choice", icon="list")
class SelectFieldType(FieldType):
    ui_component = "SelectField"
    template = "fields/select.html"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        selected = "" if context["value"] is None else str(context["value"])
        context["placeholder"] = field.attributes.placeholder or "Select an option"
        context["options"] = [
            {"label": option.label, "value": option.value_str, "selected": option.value_str == selected}
            for option in field.attributes.options or []
        ]
        return context

    def get_form_input_config(self, field) -> dict[str, Any]:
        config = super().get_form_input_config(field)
        config["props"]["options"] = [
            option.model_dump() for option in field.attributes.options or []
        ]
        return config


@field_type("radio", "Radio", category="choice", icon="circle-dot")
class RadioFieldType(SelectFieldType):
    ui_component = "RadioField"
    template = "fields/choice_group.html"
    input_type = "radio"


@field_type("button_group", "Button Group", category="choice", icon="grip")
class ButtonGroupFieldType(RadioFieldType):
    ui_component = "ButtonGroupField"


@field_type("checkbox", "Checkbox", category="choice", icon="square-check")
class CheckboxFieldType(FieldType):
    ui_component = "CheckboxField"
    template = "fields/checkbox.html"
    input_type = "checkbox"
    column_type = "TINYINT(1)"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        context["checked"] = context["value"] not in ("", None, False, 0, "0", "false")
        return context


@field_type("boolean", "Boolean", category="choice", icon="toggle-on")
class BooleanFieldType(CheckboxFieldType):
    pass
