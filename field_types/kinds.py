"""Built-in field kinds"""

from enum import Enum


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    INTEGER = "integer"
    DECIMAL = "decimal"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    RANGE = "range"
    SELECT = "select"
    RADIO = "radio"
    BUTTON_GROUP = "button_group"
    CHECKBOX = "checkbox"
    BOOLEAN = "boolean"
    COLOR = "color"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    RELATION = "relation"
    USER = "user"
    POST_OBJECT = "post_object"
    MARKDOWN = "markdown"
    WYSIWYG = "wysiwyg"
    READONLY = "readonly"
    HIDDEN = "hidden"
    SORTABLE_CHILDREN = "sortable_children"

    @classmethod
    def decode(cls, name: str | None) -> "FieldKind":
        """Map a type name to a built-in kind; unknown names decode to TEXT."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return cls.TEXT


# Kinds whose values are compared numerically
NUMERIC_KINDS = frozenset({FieldKind.NUMBER, FieldKind.INTEGER, FieldKind.DECIMAL, FieldKind.RANGE})

# Kinds whose values are booleans
BOOLEAN_KINDS = frozenset({FieldKind.CHECKBOX, FieldKind.BOOLEAN})

# Kinds that pick from a declared options list
CHOICE_KINDS = frozenset({FieldKind.SELECT, FieldKind.RADIO, FieldKind.BUTTON_GROUP})


def humanize(key: str) -> str:
    """contact_email -> Contact Email"""
    return " ".join(part[:1].upper() + part[1:] for part in key.replace("_", " ").split())
