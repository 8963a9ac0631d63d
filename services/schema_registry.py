"""Schema Registry - process-wide table of schema key -> schema class"""

import importlib
import inspect
import re
from typing import Dict, Iterable, Optional, Type

from core.exceptions import RegistryFrozenError, SchemaClassMissingError, SchemaNotFoundError
from core.logging_config import get_logger
from models.collection import import_string
from models.schema import Schema

logger = get_logger(__name__)

KEY_PATTERN = re.compile(r"^[a-z_]+$")

SchemaReference = Type[Schema] | str


def validate_schema_key(key: str) -> str:
    if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
        raise ValueError(f"Invalid schema key '{key}': use lowercase letters and underscores only")
    return key


class SchemaRegistry:
    """
    Registered schemas by key.

    Schemas register while the process starts (schema modules call
    ``Schema.register``); the registry is then frozen and only read.
    A class may be registered directly or as a dotted import path that is
    loaded when the schema is first resolved.
    """

    def __init__(self):
        self._schemas: Dict[str, SchemaReference] = {}
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _ensure_open(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Schema registry is frozen")

    def register(self, key: str, schema: SchemaReference) -> None:
        self._ensure_open()
        validate_schema_key(key)

        if inspect.isclass(schema):
            schema.check_fields()
        elif not isinstance(schema, str):
            raise TypeError(f"Schema '{key}' must be a Schema class or a dotted import path")

        if key in self._schemas:
            logger.warning(f"Schema '{key}' registered twice; the latest registration wins")
        self._schemas[key] = schema
        logger.debug(f"Registered schema: {key}")

    def unregister(self, key: str) -> None:
        self._ensure_open()
        if key not in self._schemas:
            raise SchemaNotFoundError(key)
        del self._schemas[key]

    def get(self, key: str) -> Optional[SchemaReference]:
        return self._schemas.get(key)

    def has(self, key: str) -> bool:
        return key in self._schemas

    def all(self) -> Dict[str, SchemaReference]:
        return dict(self._schemas)

    def keys(self) -> list[str]:
        return list(self._schemas)

    def clear(self) -> None:
        self._ensure_open()
        self._schemas.clear()

    def freeze(self) -> None:
        self._frozen = True

    def load_class(self, key: str) -> Type[Schema]:
        """Schema class registered under ``key``.

        Raises SchemaNotFoundError for unknown keys and SchemaClassMissingError
        when a registered dotted path does not import to a Schema subclass.
        """
        schema = self._schemas.get(key)
        if schema is None:
            raise SchemaNotFoundError(key)
        if not isinstance(schema, str):
            return schema

        try:
            schema_class = import_string(schema)
        except ImportError as e:
            raise SchemaClassMissingError(key, schema) from e
        if not (inspect.isclass(schema_class) and issubclass(schema_class, Schema)):
            raise SchemaClassMissingError(key, schema)
        return schema_class


def load_schema_modules(modules: Iterable[str]) -> None:
    """Import schema modules; importing them registers their schemas"""
    for module_path in modules:
        importlib.import_module(module_path)
        logger.info(f"Loaded schema module: {module_path}")


# Singleton instance
_schema_registry: Optional[SchemaRegistry] = None


def get_schema_registry() -> SchemaRegistry:
    """Get the process-wide SchemaRegistry"""
    global _schema_registry
    if _schema_registry is None:
        _schema_registry = SchemaRegistry()
    return _schema_registry


def reset_schema_registry() -> None:
    """Drop the process-wide registry (tests)"""
    global _schema_registry
    _schema_registry = None
