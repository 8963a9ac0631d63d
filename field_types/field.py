"""Field definitions: a key, a type name and typed attributes.

Definitions are built once while a schema is declared, using the chainable
setters::

    FieldDefinition.create("email", "contact_email").label("Email").required()

Each setter re-validates the attribute set, so a bad value fails at the line
that declares it. Once the declaring schema registers, the definition is
frozen and further setter calls raise FieldFrozenError.
"""

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from markupsafe import Markup

from core.exceptions import FieldFrozenError
from field_types.attributes import FieldAttributes, RelationConfig, SortableChildrenConfig
from field_types.kinds import FieldKind, humanize
from field_types.rules import ValidationRules

if TYPE_CHECKING:
    from field_types.base_field_type import FieldType
    from services.field_type_registry import FieldTypeRegistry


class FieldDefinition:
    def __init__(
        self,
        type: str,
        key: str,
        attributes: Mapping[str, Any] | FieldAttributes | None = None,
        registry: Optional["FieldTypeRegistry"] = None,
    ):
        self._type = type or FieldKind.TEXT.value
        self._key = key
        self._registry = registry
        self._frozen = False
        if isinstance(attributes, FieldAttributes):
            self._data = attributes.to_dict()
            self._attributes = attributes
        else:
            self._data = dict(attributes or {})
            self._attributes = FieldAttributes.from_mapping(self._data)

    @classmethod
    def create(cls, type: str, key: str, registry: Optional["FieldTypeRegistry"] = None) -> "FieldDefinition":
        return cls(type, key, registry=registry)

    @classmethod
    def from_attributes(
        cls,
        key: str,
        attributes: Mapping[str, Any],
        registry: Optional["FieldTypeRegistry"] = None,
    ) -> "FieldDefinition":
        """Build from a merged attribute mapping that carries its own ``type``."""
        data = dict(attributes)
        field_type = data.pop("type", None) or FieldKind.TEXT.value
        return cls(field_type, key, data, registry=registry)

    @property
    def key(self) -> str:
        return self._key

    @property
    def type(self) -> str:
        return self._type

    @property
    def kind(self) -> FieldKind:
        return FieldKind.decode(self._type)

    @property
    def attributes(self) -> FieldAttributes:
        return self._attributes

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _set(self, name: str, value: Any) -> "FieldDefinition":
        if self._frozen:
            raise FieldFrozenError(f"Field '{self._key}' is frozen; '{name}' cannot be changed")
        data = {**self._data, name: value}
        self._attributes = FieldAttributes.from_mapping(data)
        self._data = data
        return self

    # Chainable setters

    def label(self, label: str) -> "FieldDefinition":
        return self._set("label", label)

    def required(self, required: bool = True) -> "FieldDefinition":
        return self._set("required", required)

    def default(self, value: Any) -> "FieldDefinition":
        return self._set("default", value)

    def placeholder(self, placeholder: str) -> "FieldDefinition":
        return self._set("placeholder", placeholder)

    def help_text(self, text: str) -> "FieldDefinition":
        return self._set("help_text", text)

    def max_length(self, length: int) -> "FieldDefinition":
        return self._set("max_length", length)

    def min_length(self, length: int) -> "FieldDefinition":
        return self._set("min_length", length)

    def min(self, value: int | float) -> "FieldDefinition":
        return self._set("min", value)

    def max(self, value: int | float) -> "FieldDefinition":
        return self._set("max", value)

    def step(self, value: int | float) -> "FieldDefinition":
        return self._set("step", value)

    def options(self, options: Iterable[Any]) -> "FieldDefinition":
        return self._set("options", list(options))

    def append(self, text: str) -> "FieldDefinition":
        return self._set("append", text)

    def prepend(self, text: str) -> "FieldDefinition":
        return self._set("prepend", text)

    def pattern(self, pattern: str, message: Optional[str] = None) -> "FieldDefinition":
        self._set("pattern", pattern)
        if message is not None:
            self._set("pattern_message", message)
        return self

    def hidden(self, hidden: bool = True) -> "FieldDefinition":
        return self._set("hidden", hidden)

    def relation(self, config: Mapping[str, Any] | RelationConfig) -> "FieldDefinition":
        if isinstance(config, RelationConfig):
            config = config.model_dump(by_alias=True)
        return self._set("relation", dict(config))

    def sortable_children(self, config: Mapping[str, Any] | SortableChildrenConfig) -> "FieldDefinition":
        if isinstance(config, SortableChildrenConfig):
            config = config.model_dump(by_alias=True)
        return self._set("sortable_children", dict(config))

    def attribute(self, name: str, value: Any) -> "FieldDefinition":
        """Set any attribute, including ones built-in types do not know about."""
        return self._set(name, value)

    # Accessors

    def get_label(self) -> str:
        return self._attributes.label or humanize(self._key)

    def is_required(self) -> bool:
        return self._attributes.required

    def is_hidden(self) -> bool:
        return self._attributes.hidden

    def get_validation(self) -> ValidationRules:
        return self.field_type.get_validation_rules(self)

    @property
    def field_type(self) -> "FieldType":
        registry = self._registry
        if registry is None:
            from services.field_type_registry import get_field_type_registry
            registry = get_field_type_registry()
        return registry.resolve(self._type)

    # Behaviour, delegated to the field type

    def render(self, value: Any = None) -> Markup:
        return self.field_type.render(self, value)

    def validate(self, value: Any) -> list[str]:
        return self.field_type.validate(self, value)

    def column_definition(self) -> Optional[str]:
        return self.field_type.column_definition(self)

    def get_form_input_config(self) -> dict[str, Any]:
        return self.field_type.get_form_input_config(self)

    def freeze(self) -> "FieldDefinition":
        self.field_type.check_declaration(self)
        self._frozen = True
        return self

    def as_override(self) -> dict[str, Any]:
        """Sparse attribute mapping (plus type) as stored in schema overrides."""
        return {"type": self._type, **self._attributes.to_dict()}

    def to_dict(self) -> dict[str, Any]:
        return {"key": self._key, **self.as_override()}

    def __repr__(self) -> str:
        return f"FieldDefinition(type={self._type!r}, key={self._key!r})"
