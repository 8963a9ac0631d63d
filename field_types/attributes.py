"""Typed field attributes.

Attributes are accepted in either camelCase (``helpText``, ``maxLength``) or
snake_case (``help_text``, ``max_length``) and always serialize to camelCase,
which is the shape the form renderers and the schema gateway expose.
Attributes that are not recognized are kept in ``model_extra`` untouched.
"""

import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.exceptions import InvalidFieldConfigError


def _format_errors(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


class FieldOption(BaseModel):
    """A single {label, value} choice of a select / radio / button group."""
    label: str
    value: Any

    @property
    def value_str(self) -> str:
        return "" if self.value is None else str(self.value)


def normalize_options(options: Any) -> list[FieldOption]:
    """Accept bare strings, {label, value} mappings or FieldOption instances."""
    normalized = []
    for option in options or []:
        if isinstance(option, FieldOption):
            normalized.append(option)
        elif isinstance(option, Mapping):
            value = option.get("value", option.get("label"))
            normalized.append(FieldOption(label=str(option.get("label", value)), value=value))
        else:
            normalized.append(FieldOption(label=str(option), value=option))
    return normalized


class SortableChildrenConfig(BaseModel):
    """Configuration of a ``sortable_children`` field.

    ``endpoint`` and ``filterBy`` are mandatory; ``updateEndpoint`` falls back
    to ``endpoint``.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    endpoint: str
    update_endpoint: Optional[str] = Field(default=None, alias="updateEndpoint")
    filter_by: str = Field(alias="filterBy")
    label_field: str = Field(default="title", alias="labelField")
    position_field: str = Field(default="position", alias="positionField")
    id_field: str = Field(default="id", alias="idField")

    @model_validator(mode="before")
    @classmethod
    def _require_endpoint_and_filter(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            if not data.get("endpoint"):
                raise ValueError("sortable_children requires an endpoint")
            if not (data.get("filterBy") or data.get("filter_by")):
                raise ValueError("sortable_children requires a filterBy parameter")
        return data

    @model_validator(mode="after")
    def _default_update_endpoint(self) -> "SortableChildrenConfig":
        if not self.update_endpoint:
            self.update_endpoint = self.endpoint
        return self

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "SortableChildrenConfig":
        try:
            return cls.model_validate(dict(config))
        except ValidationError as exc:
            raise InvalidFieldConfigError(_format_errors(exc)) from exc


class RelationConfig(BaseModel):
    """Where a relation field loads its options from."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    endpoint: str = Field(min_length=1)
    label_field: str = Field(default="title", alias="labelField")
    value_field: str = Field(default="id", alias="valueField")
    placeholder: str = "Select an option..."
    filters: dict[str, Any] = Field(default_factory=dict)
    per_page: int = Field(default=20, alias="perPage")


class FieldAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    label: Optional[str] = None
    required: bool = False
    default: Any = None
    placeholder: Optional[str] = None
    help_text: Optional[str] = Field(default=None, alias="helpText")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    min: Optional[int | float] = None
    max: Optional[int | float] = None
    step: Optional[int | float] = None
    options: Optional[list[FieldOption]] = None
    append: Optional[str] = None
    prepend: Optional[str] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = Field(default=None, alias="patternMessage")
    hidden: bool = False
    rows: Optional[int] = None
    relation: Optional[RelationConfig] = None
    sortable_children: Optional[SortableChildrenConfig] = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> Any:
        if value is None:
            return None
        return normalize_options(value)

    @field_validator("pattern")
    @classmethod
    def _compile_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"Invalid regex pattern: {value} - {exc}")
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FieldAttributes":
        """Validate raw attributes, raising InvalidFieldConfigError on bad input."""
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise InvalidFieldConfigError(_format_errors(exc)) from exc

    def get(self, name: str, default: Any = None) -> Any:
        """Read a declared or an extra (forward-compatible) attribute."""
        if name in type(self).model_fields:
            value = getattr(self, name)
            return default if value is None else value
        for field_name, info in type(self).model_fields.items():
            if info.alias == name:
                value = getattr(self, field_name)
                return default if value is None else value
        return (self.model_extra or {}).get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Only the attributes that were set, camelCased."""
        return self.model_dump(by_alias=True, exclude_unset=True)
