"""Numeric field types"""

from typing import Any, Optional

from field_types.base_field_type import FieldType, field_type


@field_type("number", "Number", category="number", icon="hashtag")
class NumberFieldType(FieldType):
    ui_component = "NumberField"
    input_type = "number"
    column_type = "INT"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        attributes = field.attributes
        context.update(min=attributes.min, max=attributes.max, step=attributes.step)
        return context

    def get_form_input_config(self, field) -> dict[str, Any]:
        config = super().get_form_input_config(field)
        attributes = field.attributes
        for name in ("min", "max", "step", "append", "prepend"):
            value = getattr(attributes, name)
            if value is not None:
                config["props"][name] = value
        return config


@field_type("integer", "Integer", category="number", icon="hashtag")
class IntegerFieldType(NumberFieldType):
    pass


@field_type("decimal", "Decimal", category="number", icon="percent")
class DecimalFieldType(NumberFieldType):
    column_type = "DECIMAL(10,2)"


@field_type("range", "Range", category="number", icon="sliders")
class RangeFieldType(NumberFieldType):
    """Slider; stored as INT unless the step is fractional."""
    ui_component = "RangeField"
    template = "fields/range.html"
    input_type = "range"

    def get_column_type(self, field) -> Optional[str]:
        step = field.attributes.step if field.attributes.step is not None else 1
        return "DECIMAL(10,2)" if step < 1 else "INT"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        attributes = field.attributes
        context["min"] = attributes.min if attributes.min is not None else 0
        context["max"] = attributes.max if attributes.max is not None else 100
        context["step"] = attributes.step if attributes.step is not None else 1
        if context["value"] == "":
            context["value"] = context["min"]
        return context
