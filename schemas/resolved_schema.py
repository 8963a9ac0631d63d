"""Resolved schema schemas"""

from pydantic import BaseModel, Field
from typing import Any, Optional


class ModelMetadata(BaseModel):
    """Schema for the model behind a collection"""
    class_name: str
    table: str
    fillable: list[str] = Field(default_factory=list)
    casts: dict[str, str] = Field(default_factory=dict)


class RouteInfo(BaseModel):
    """Schema for a collection's REST routes"""
    namespace: str
    route: str
    endpoint: str
    methods: dict[str, bool] = Field(default_factory=dict)


class CollectionMetadata(BaseModel):
    """Schema for collection metadata; empty when the collection cannot be loaded"""
    class_name: Optional[str] = None
    model: Optional[ModelMetadata] = None
    routes: Optional[RouteInfo] = None
    config: dict[str, Any] = Field(default_factory=dict)


class ResolvedSchema(BaseModel):
    """Schema for a resolved schema: collection metadata plus merged field attributes"""
    key: str
    class_name: str
    name: str
    collection: CollectionMetadata = Field(default_factory=CollectionMetadata)
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)
    degraded: bool = False

    model_config = {"frozen": True}

    @property
    def endpoint(self) -> Optional[str]:
        routes = self.collection.routes
        return routes.endpoint if routes else None

    @property
    def fillable(self) -> list[str]:
        model = self.collection.model
        return list(model.fillable) if model else list(self.fields)


class ResolvedSchemaSummary(BaseModel):
    """Schema for listing resolved schemas"""
    key: str
    class_name: str
    name: str
    table: Optional[str] = None
    endpoint: Optional[str] = None
    field_count: int = 0
    degraded: bool = False

    @classmethod
    def from_resolved(cls, resolved: ResolvedSchema) -> "ResolvedSchemaSummary":
        model = resolved.collection.model
        return cls(
            key=resolved.key,
            class_name=resolved.class_name,
            name=resolved.name,
            table=model.table if model else None,
            endpoint=resolved.endpoint,
            field_count=len(resolved.fields),
            degraded=resolved.degraded,
        )
