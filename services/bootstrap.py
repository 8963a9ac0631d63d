"""Startup phase: load field types and schemas, then freeze both registries"""

from core.logging_config import get_logger
from core.settings import Settings, settings as default_settings
from services.field_type_registry import get_field_type_registry
from services.schema_registry import get_schema_registry, load_schema_modules

logger = get_logger(__name__)


def bootstrap(settings: Settings = default_settings) -> None:
    """Populate and freeze the process-wide registries; later calls are no-ops"""
    field_type_registry = get_field_type_registry()
    schema_registry = get_schema_registry()
    if field_type_registry.is_frozen and schema_registry.is_frozen:
        return

    for module_path in settings.field_type_modules:
        field_type_registry.load_module(module_path)
    load_schema_modules(settings.schema_modules)

    field_type_registry.freeze()
    schema_registry.freeze()
    logger.info_ctx(
        "Registries ready",
        field_types=len(field_type_registry.all()),
        schemas=len(schema_registry.keys()),
    )
