"""Field Type Registry - runtime registry of field types by handle"""

from typing import Dict, Iterable, Optional, Type
import importlib
import inspect

from core.exceptions import RegistryFrozenError
from core.logging_config import get_logger
from field_types.base_field_type import FieldType
from field_types.kinds import FieldKind

logger = get_logger(__name__)

BUILTIN_MODULE = "field_types"

REQUIRED_METHODS = ("render", "validate", "column_definition")


class FieldTypeRegistry:
    """
    Maps a type name to a field type instance.

    Field types are:
    - Decorated with @field_type
    - Loaded from the built-in field_types package and any configured modules
    - Overwritten by a later registration under the same handle
    - Locked once the registry is frozen at startup
    """

    def __init__(self):
        self._field_types: Dict[str, FieldType] = {}
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def register(self, field_type: FieldType | Type[FieldType], name: Optional[str] = None) -> None:
        """Register a field type instance or class under its handle (or ``name``)"""
        if self._frozen:
            raise RegistryFrozenError("Field type registry is frozen")

        if inspect.isclass(field_type):
            field_type = field_type()

        missing = [method for method in REQUIRED_METHODS if not callable(getattr(field_type, method, None))]
        if missing:
            raise TypeError(f"Field type {field_type!r} is missing: {', '.join(missing)}")

        handle = name or getattr(field_type, "handle", "")
        if not handle:
            raise ValueError("Field type must declare a handle")

        if handle in self._field_types:
            logger.debug(f"Overriding field type: {handle}")
        self._field_types[handle] = field_type

    def load_module(self, module_path: str) -> int:
        """Register every @field_type class exported by a module"""
        module = importlib.import_module(module_path)
        count = 0
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (
                inspect.isclass(attr) and
                issubclass(attr, FieldType) and
                attr is not FieldType and
                attr.handle
            ):
                self.register(attr)
                count += 1
        logger.info(f"Loaded {count} field types from {module_path}")
        return count

    def load_field_types(self, modules: Iterable[str] = ()) -> None:
        """Load the built-in field types, then custom modules (which may override them)"""
        self.load_module(BUILTIN_MODULE)
        for module_path in modules:
            try:
                self.load_module(module_path)
            except ImportError as e:
                logger.error(f"Failed to load field type module {module_path}: {e}")
                raise

    def get(self, handle: str) -> Optional[FieldType]:
        return self._field_types.get(handle)

    def resolve(self, handle: str) -> FieldType:
        """Field type for a handle; unknown handles fall back to text"""
        field_type = self._field_types.get(handle)
        if field_type is None:
            field_type = self._field_types[FieldKind.decode(handle).value]
        return field_type

    def all(self) -> Dict[str, FieldType]:
        return self._field_types.copy()

    def exists(self, handle: str) -> bool:
        return handle in self._field_types

    def freeze(self) -> None:
        self._frozen = True


# Singleton instance
_field_type_registry: Optional[FieldTypeRegistry] = None


def get_field_type_registry() -> FieldTypeRegistry:
    """Get the process-wide FieldTypeRegistry, loading built-in types on first use"""
    global _field_type_registry
    if _field_type_registry is None:
        _field_type_registry = FieldTypeRegistry()
        _field_type_registry.load_field_types()
    return _field_type_registry


def reset_field_type_registry() -> None:
    """Drop the process-wide registry (tests)"""
    global _field_type_registry
    _field_type_registry = None
