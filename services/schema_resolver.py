"""Schema Resolver - merges a schema's overrides with its collection's fields"""

import inspect
from typing import Any, Optional

from core.exceptions import CollectionUnloadableError, SchemaClassMissingError
from core.logging_config import get_logger
from field_types.kinds import FieldKind, humanize
from models.collection import Collection, import_string
from schemas.resolved_schema import (
    CollectionMetadata,
    ModelMetadata,
    ResolvedSchema,
    ResolvedSchemaSummary,
    RouteInfo,
)
from services.schema_registry import SchemaRegistry, get_schema_registry

logger = get_logger(__name__)

CAST_TYPES = {
    "boolean": FieldKind.CHECKBOX,
    "bool": FieldKind.CHECKBOX,
    "integer": FieldKind.NUMBER,
    "int": FieldKind.NUMBER,
    "float": FieldKind.NUMBER,
    "double": FieldKind.NUMBER,
    "decimal": FieldKind.NUMBER,
    "datetime": FieldKind.DATETIME,
    "date": FieldKind.DATE,
}

NAME_HINTS = (
    (("email",), FieldKind.EMAIL),
    (("url", "website", "link"), FieldKind.URL),
    (("password",), FieldKind.PASSWORD),
)


def infer_field_type(key: str, cast: Optional[str] = None) -> FieldKind:
    """Type of a field with no override: from its cast, else from its name"""
    if cast:
        # "decimal:2" style casts carry arguments after the colon
        kind = CAST_TYPES.get(cast.split(":", 1)[0].lower())
        if kind is not None:
            return kind

    lowered = key.lower()
    for needles, kind in NAME_HINTS:
        if any(needle in lowered for needle in needles):
            return kind
    return FieldKind.TEXT


def default_attributes(key: str, cast: Optional[str] = None) -> dict[str, Any]:
    return {
        "type": infer_field_type(key, cast).value,
        "label": humanize(key),
        "required": False,
        "hidden": False,
    }


class SchemaResolver:
    """
    Builds ResolvedSchema snapshots.

    Resolution is pure: nothing is cached or mutated, so it is safe to run
    concurrently once the registry is frozen.
    """

    def __init__(self, registry: Optional[SchemaRegistry] = None):
        self.registry = registry or get_schema_registry()

    def resolve(self, key: str) -> ResolvedSchema:
        """
        Resolve a registered schema.

        Raises:
            SchemaNotFoundError: no schema under ``key``
            SchemaClassMissingError: the registered class cannot be loaded
        """
        schema_class = self.registry.load_class(key)
        try:
            schema = schema_class()
        except Exception as e:
            raise SchemaClassMissingError(key, schema_class.__name__) from e

        overrides = schema.get_field_overrides()
        class_name = f"{schema_class.__module__}.{schema_class.__qualname__}"

        try:
            collection = self._load_collection(schema.get_collection_ref())
            model = collection.load_model_metadata()
            routes = RouteInfo(
                namespace=collection.get_rest_namespace(),
                route=collection.get_route(),
                endpoint=collection.get_endpoint(),
                methods=collection.get_allowed_methods(),
            )
        except CollectionUnloadableError as e:
            logger.warning_ctx(f"Resolving '{key}' without collection metadata: {e}", schema_key=key)
            return ResolvedSchema(
                key=key,
                class_name=class_name,
                name=schema_class.__name__,
                fields={field_key: dict(attributes) for field_key, attributes in overrides.items()},
                degraded=True,
            )

        fields = {}
        for field_key in model["fillable"]:
            attributes = default_attributes(field_key, model["casts"].get(field_key))
            attributes.update(overrides.get(field_key, {}))
            fields[field_key] = attributes

        collection_class = type(collection)
        return ResolvedSchema(
            key=key,
            class_name=class_name,
            name=schema_class.__name__,
            collection=CollectionMetadata(
                class_name=f"{collection_class.__module__}.{collection_class.__qualname__}",
                model=ModelMetadata(**model),
                routes=routes,
                config=collection.get_config(),
            ),
            fields=fields,
        )

    def resolve_all(self) -> list[ResolvedSchemaSummary]:
        """Summaries of every registered schema whose class can be loaded"""
        summaries = []
        for key in self.registry.keys():
            try:
                resolved = self.resolve(key)
            except SchemaClassMissingError as e:
                logger.warning_ctx(f"Skipping schema '{key}': {e}", schema_key=key)
                continue
            summaries.append(ResolvedSchemaSummary.from_resolved(resolved))
        return summaries

    @staticmethod
    def _load_collection(reference: Any) -> Collection:
        if reference is None:
            raise CollectionUnloadableError("<none>", "schema declares no collection")

        if isinstance(reference, str):
            try:
                reference = import_string(reference)
            except ImportError as e:
                raise CollectionUnloadableError(reference, str(e)) from e

        if inspect.isclass(reference) and issubclass(reference, Collection):
            return reference()
        if isinstance(reference, Collection):
            return reference
        raise CollectionUnloadableError(repr(reference), "not a Collection")


def get_schema_resolver() -> SchemaResolver:
    return SchemaResolver(get_schema_registry())
