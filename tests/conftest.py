from typing import Generator
import pytest
from fastapi.testclient import TestClient
from faker import Faker

from main import app
from core.settings import settings
from services.field_type_registry import FieldTypeRegistry, get_field_type_registry
from services.schema_registry import SchemaRegistry
from services.schema_resolver import SchemaResolver, get_schema_resolver
from ticket_fixtures import OrphanSchema, TicketSchema

fake = Faker()


@pytest.fixture
def field_type_registry() -> FieldTypeRegistry:
    """A registry holding the built-in field types."""
    registry = FieldTypeRegistry()
    registry.load_field_types()
    return registry


@pytest.fixture
def schema_registry() -> SchemaRegistry:
    """A fresh registry holding the ticket schemas."""
    registry = SchemaRegistry()
    registry.register("ticket", TicketSchema)
    registry.register("ticket_reply", "ticket_fixtures.TicketReplySchema")
    registry.register("orphan", OrphanSchema)
    return registry


@pytest.fixture
def resolver(schema_registry: SchemaRegistry) -> SchemaResolver:
    return SchemaResolver(schema_registry)


@pytest.fixture
def ticket_schema(resolver: SchemaResolver):
    return resolver.resolve("ticket")


@pytest.fixture
def client(resolver: SchemaResolver, field_type_registry: FieldTypeRegistry) -> Generator[TestClient, None, None]:
    """Create a test client serving the ticket schemas."""
    app.dependency_overrides[get_schema_resolver] = lambda: resolver
    app.dependency_overrides[get_field_type_registry] = lambda: field_type_registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def ticket_payload() -> dict:
    """A ticket submission that passes every rule."""
    return {
        "title": fake.sentence(nb_words=6)[:120],
        "description": fake.paragraph(),
        "status": "open",
        "priority": "high",
        "assigned_to": fake.random_int(min=1, max=50),
        "contact_email": fake.email(),
    }


@pytest.fixture
def admin_token(monkeypatch) -> str:
    """Require a bearer token on the schema gateway for one test."""
    token = fake.sha256()
    monkeypatch.setattr(settings, "ADMIN_API_TOKEN", token)
    return token
