"""Date and time field types"""

from datetime import date, datetime, time
from typing import Any

from field_types.base_field_type import FieldType, field_type


@field_type("date", "Date", category="date", icon="calendar")
class DateFieldType(FieldType):
    ui_component = "DatePickerField"
    input_type = "date"
    column_type = "DATE"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        if isinstance(context["value"], (date, datetime, time)):
            context["value"] = self.format_value(context["value"])
        return context

    def format_value(self, value) -> str:
        if isinstance(value, datetime):
            value = value.date()
        return value.isoformat()


@field_type("datetime", "Date & Time", category="date", icon="calendar-days")
class DateTimeFieldType(DateFieldType):
    ui_component = "DateTimePickerField"
    input_type = "datetime-local"
    column_type = "DATETIME"

    def format_value(self, value) -> str:
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%dT%H:%M")
        return value.isoformat()


@field_type("time", "Time", category="date", icon="clock")
class TimeFieldType(DateFieldType):
    ui_component = "TimePickerField"
    input_type = "time"
    column_type = "TIME"

    def format_value(self, value) -> str:
        if isinstance(value, datetime):
            value = value.time()
        return value.strftime("%H:%M")
