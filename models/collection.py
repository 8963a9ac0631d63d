"""Collection - the data-access side a Schema wraps.

A collection names the SQLAlchemy model it manages and how that model is
exposed over REST. Blueprint only reads this metadata; record CRUD is served
by the host's collection endpoints.
"""

import importlib
from typing import Any, ClassVar, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, Numeric, inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

from core.exceptions import CollectionUnloadableError
from core.settings import settings

ROUTE_METHODS = ("get_many", "get_one", "create", "update", "delete")

# Checked in order; Boolean before Integer, Float before Numeric (Float subclasses Numeric)
_CAST_FOR_COLUMN_TYPE = (
    (Boolean, "boolean"),
    (Integer, "integer"),
    (Float, "float"),
    (Numeric, "decimal"),
    (DateTime, "datetime"),
    (Date, "date"),
    (JSON, "array"),
)


def import_string(dotted_path: str) -> Any:
    """Import ``package.module.Attribute`` (or ``package.module:Attribute``)."""
    if ":" in dotted_path:
        module_path, _, attr_name = dotted_path.partition(":")
    else:
        module_path, _, attr_name = dotted_path.rpartition(".")
    if not module_path or not attr_name:
        raise ImportError(f"'{dotted_path}' is not a dotted import path")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr_name)
    except AttributeError as e:
        raise ImportError(f"Module '{module_path}' has no attribute '{attr_name}'") from e


def cast_for_column(column) -> Optional[str]:
    for column_type, cast in _CAST_FOR_COLUMN_TYPE:
        if isinstance(column.type, column_type):
            return cast
    return None


class Collection:
    """
    Base class for collections.

    Subclasses set:
    - model: SQLAlchemy model class (or dotted path to it)
    - routes: {enabled, prefix, methods{get_many, ...}, permissions}
    - config: {searchable, filterable, sortable, per_page, max_per_page}
    """
    model: ClassVar[Any] = None
    rest_namespace: ClassVar[Optional[str]] = None
    routes: ClassVar[dict[str, Any]] = {}
    config: ClassVar[dict[str, Any]] = {}

    def get_model(self) -> type:
        model = self.model
        if model is None:
            raise CollectionUnloadableError(type(self).__name__, "no model configured")
        if isinstance(model, str):
            try:
                model = import_string(model)
            except ImportError as e:
                raise CollectionUnloadableError(model, str(e)) from e
        return model

    def get_routes(self) -> dict[str, Any]:
        return {"enabled": True, "prefix": None, "methods": {}, "permissions": {}, **self.routes}

    def get_rest_namespace(self) -> str:
        return self.rest_namespace or settings.COLLECTION_NAMESPACE

    def get_route(self) -> str:
        """Route slug: the configured prefix, else the model's table name."""
        prefix = self.get_routes().get("prefix")
        if prefix:
            return prefix.strip("/")
        return self.get_model().__tablename__

    def get_allowed_methods(self) -> dict[str, bool]:
        methods = self.get_routes().get("methods") or {}
        return {name: bool(methods.get(name, True)) for name in ROUTE_METHODS}

    def get_endpoint(self) -> str:
        return f"{settings.REST_BASE}{self.get_rest_namespace()}/{self.get_route()}"

    def get_config(self) -> dict[str, Any]:
        return {
            "searchable": [],
            "filterable": [],
            "sortable": [],
            "per_page": 15,
            "max_per_page": 100,
            **self.config,
        }

    def load_model_metadata(self) -> dict[str, Any]:
        """Table name, fillable columns (declaration order) and casts of the model."""
        model = self.get_model()
        try:
            mapper = sa_inspect(model)
        except NoInspectionAvailable as e:
            raise CollectionUnloadableError(f"{model.__module__}.{model.__name__}", "not a mapped model") from e

        fillable = list(getattr(model, "__fillable__", ()) or ())
        explicit_casts = dict(getattr(model, "__casts__", {}) or {})

        casts = {}
        for key in fillable:
            if key in explicit_casts:
                continue
            column = mapper.columns.get(key)
            cast = cast_for_column(column) if column is not None else None
            if cast:
                casts[key] = cast
        casts.update(explicit_casts)

        return {
            "class_name": f"{model.__module__}.{model.__name__}",
            "table": model.__tablename__,
            "fillable": fillable,
            "casts": casts,
        }
