from typing import TYPE_CHECKING, Any, Mapping

from client.components.base import AsyncFieldComponent, FieldComponent
from client.components.choice import ButtonGroup, RadioGroup, SelectInput
from client.components.inputs import (
    CheckboxInput,
    ColorInput,
    DateInput,
    DateTimeInput,
    EmailInput,
    HiddenInput,
    LinkInput,
    MarkdownInput,
    NumberInput,
    PasswordInput,
    RangeInput,
    ReadOnlyInput,
    RichTextInput,
    TextareaInput,
    TextInput,
    TimeInput,
)
from client.components.pickers import PostObjectPicker, RelationPicker, UserPicker
from client.components.sortable_children import SortableChildren

if TYPE_CHECKING:
    from client.dynamic_form import DynamicForm

COMPONENTS: dict[str, type[FieldComponent]] = {
    "text": TextInput,
    "textarea": TextareaInput,
    "number": NumberInput,
    "integer": NumberInput,
    "decimal": NumberInput,
    "email": EmailInput,
    "url": LinkInput,
    "password": PasswordInput,
    "range": RangeInput,
    "select": SelectInput,
    "radio": RadioGroup,
    "button_group": ButtonGroup,
    "checkbox": CheckboxInput,
    "boolean": CheckboxInput,
    "color": ColorInput,
    "date": DateInput,
    "datetime": DateTimeInput,
    "time": TimeInput,
    "relation": RelationPicker,
    "user": UserPicker,
    "post_object": PostObjectPicker,
    "markdown": MarkdownInput,
    "wysiwyg": RichTextInput,
    "readonly": ReadOnlyInput,
    "hidden": HiddenInput,
    "sortable_children": SortableChildren,
}


def component_for(field_type: str | None) -> type[FieldComponent]:
    """Component class for a type name; unknown names get a text input"""
    return COMPONENTS.get(field_type or "text", TextInput)


def build_component(key: str, config: Mapping[str, Any], form: "DynamicForm") -> FieldComponent:
    return component_for(config.get("type")).from_config(key, config, form)


__all__ = [
    "AsyncFieldComponent",
    "FieldComponent",
    "COMPONENTS",
    "component_for",
    "build_component",
]
