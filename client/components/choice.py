"""Components that pick from declared options"""

from typing import Any

from client.components.base import FieldComponent


class SelectInput(FieldComponent):
    component = "SelectField"

    def coerce(self, raw: Any) -> Any:
        if isinstance(raw, (list, tuple)):
            return [str(item) for item in raw]
        return super().coerce(raw)

    def submitted(self, value: Any) -> Any:
        # back to the option's own type, e.g. "1" -> 1
        native = {option.value_str: option.value for option in self.attributes.options or []}
        if isinstance(value, list):
            return [native.get(item, item) for item in value]
        return native.get(value, value)

    def props(self) -> dict[str, Any]:
        props = super().props()
        props["placeholder"] = self.attributes.placeholder or "Select an option"
        props["options"] = [option.model_dump() for option in self.attributes.options or []]
        return props


class RadioGroup(SelectInput):
    component = "RadioField"
    input_type = "radio"


class ButtonGroup(RadioGroup):
    component = "ButtonGroupField"
