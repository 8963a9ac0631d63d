from field_types.base_field_type import FieldType, field_type
from field_types.field import FieldDefinition
from field_types.kinds import FieldKind
from field_types.text import (
    TextFieldType,
    EmailFieldType,
    UrlFieldType,
    PasswordFieldType,
    ColorFieldType,
    TextareaFieldType,
    HiddenFieldType,
    ReadOnlyFieldType,
)
from field_types.numeric import NumberFieldType, IntegerFieldType, DecimalFieldType, RangeFieldType
from field_types.choice import (
    SelectFieldType,
    RadioFieldType,
    ButtonGroupFieldType,
    CheckboxFieldType,
    BooleanFieldType,
)
from field_types.temporal import DateFieldType, DateTimeFieldType, TimeFieldType
from field_types.rich_text import WysiwygFieldType, MarkdownFieldType
from field_types.relation import RelationFieldType, UserFieldType, PostObjectFieldType
from field_types.sortable_children import SortableChildrenFieldType

__all__ = [
    "FieldType",
    "field_type",
    "FieldDefinition",
    "FieldKind",
    "TextFieldType",
    "EmailFieldType",
    "UrlFieldType",
    "PasswordFieldType",
    "ColorFieldType",
    "TextareaFieldType",
    "HiddenFieldType",
    "ReadOnlyFieldType",
    "NumberFieldType",
    "IntegerFieldType",
    "DecimalFieldType",
    "RangeFieldType",
    "SelectFieldType",
    "RadioFieldType",
    "ButtonGroupFieldType",
    "CheckboxFieldType",
    "BooleanFieldType",
    "DateFieldType",
    "DateTimeFieldType",
    "TimeFieldType",
    "WysiwygFieldType",
    "MarkdownFieldType",
    "RelationFieldType",
    "UserFieldType",
    "PostObjectFieldType",
    "SortableChildrenFieldType",
]
