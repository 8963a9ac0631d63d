"""Plain input components"""

from datetime import date, datetime, time
from typing import Any, Optional

from client.components.base import FieldComponent

TRUTHY = ("on", "true", "1", "yes")


def to_number(raw: Any) -> Optional[int | float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in TRUTHY


class TextInput(FieldComponent):
    component = "TextField"


class EmailInput(TextInput):
    component = "EmailField"
    input_type = "email"


class LinkInput(TextInput):
    component = "LinkField"
    input_type = "url"


class PasswordInput(TextInput):
    component = "PasswordField"
    input_type = "password"


class ColorInput(TextInput):
    component = "ColorPickerField"
    input_type = "color"


class TextareaInput(TextInput):
    component = "TextareaField"

    def props(self) -> dict[str, Any]:
        props = super().props()
        props["rows"] = self.attributes.rows or 5
        return props


class RichTextInput(TextareaInput):
    """Opaque editor widget; the form only holds its HTML / markdown source"""
    component = "WysiwygField"


class MarkdownInput(RichTextInput):
    component = "MarkdownField"


class HiddenInput(TextInput):
    component = "HiddenField"
    input_type = "hidden"


class ReadOnlyInput(TextInput):
    component = "ReadOnlyField"

    def set_value(self, raw: Any) -> None:
        raise ValueError(f"Field '{self.key}' is read only")


class NumberInput(FieldComponent):
    component = "NumberField"
    input_type = "number"

    def empty_value(self) -> Any:
        return None

    def coerce(self, raw: Any) -> Any:
        return to_number(raw)

    def props(self) -> dict[str, Any]:
        props = super().props()
        for name in ("min", "max", "step", "append", "prepend"):
            value = getattr(self.attributes, name)
            if value is not None:
                props[name] = value
        return props


class RangeInput(NumberInput):
    component = "RangeField"
    input_type = "range"

    def empty_value(self) -> Any:
        return self.attributes.min if self.attributes.min is not None else 0


class CheckboxInput(FieldComponent):
    component = "CheckboxField"
    input_type = "checkbox"

    def empty_value(self) -> Any:
        return False

    def coerce(self, raw: Any) -> Any:
        return to_bool(raw)


class DateInput(FieldComponent):
    component = "DatePickerField"
    input_type = "date"

    def coerce(self, raw: Any) -> Any:
        if isinstance(raw, datetime):
            return raw.date().isoformat()
        if isinstance(raw, date):
            return raw.isoformat()
        return super().coerce(raw).strip()


class DateTimeInput(DateInput):
    component = "DateTimePickerField"
    input_type = "datetime-local"

    def coerce(self, raw: Any) -> Any:
        if isinstance(raw, datetime):
            return raw.strftime("%Y-%m-%dT%H:%M")
        return super().coerce(raw)


class TimeInput(FieldComponent):
    component = "TimePickerField"
    input_type = "time"

    def coerce(self, raw: Any) -> Any:
        if isinstance(raw, time):
            return raw.strftime("%H:%M")
        return super().coerce(raw).strip()
