"""Ticket collection used across the test suite"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.settings import settings
from field_types.field import FieldDefinition
from models.base import Base
from models.collection import Collection
from models.schema import Schema

TICKET_FILLABLE = ["title", "description", "status", "priority", "assigned_to", "contact_email"]

TICKET_ENDPOINT = f"{settings.REST_BASE}arc-gateway/v1/tickets"


class Ticket(Base):
    __tablename__ = "tickets"
    __fillable__ = tuple(TICKET_FILLABLE)
    __casts__ = {"created_at": "datetime", "updated_at": "datetime"}

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    priority: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    assigned_to: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class TicketReply(Base):
    __tablename__ = "ticket_replies"
    __fillable__ = ("ticket_id", "message", "author_id")
    __casts__ = {"ticket_id": "integer", "author_id": "integer"}

    ticket_id: Mapped[int] = mapped_column(Integer)
    message: Mapped[str] = mapped_column(Text)
    author_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    position: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class TicketCollection(Collection):
    model = Ticket
    routes = {
        "enabled": True,
        "prefix": "tickets",
        "methods": {"get_many": True, "get_one": True, "create": True, "update": True, "delete": False},
    }
    config = {
        "searchable": ["title", "description"],
        "filterable": ["status", "priority"],
        "sortable": ["title", "created_at", "updated_at"],
    }


class TicketReplyCollection(Collection):
    model = "ticket_fixtures.TicketReply"


class TicketSchema(Schema):
    collection = TicketCollection
    fields = {
        "title": {"required": True, "maxLength": 120},
        "description": FieldDefinition.create("textarea", "description").required(),
        "priority": {
            "type": "select",
            "options": ["low", "medium", "high", "urgent"],
            "placeholder": "Select priority level",
        },
        "status": {
            "type": "select",
            "options": ["open", "in_progress", "pending", "closed"],
            "placeholder": "Select status",
        },
    }


class TicketReplySchema(Schema):
    collection = "ticket_fixtures.TicketReplyCollection"
    fields = {
        "ticket_id": {"type": "relation", "relation": {"endpoint": "arc-gateway/v1/tickets"}},
        "message": {"type": "textarea", "required": True, "minLength": 2},
        "author_id": {"type": "user", "roles": ["editor"]},
    }


class OrphanSchema(Schema):
    """Declares fields but no loadable collection"""
    collection = "ticket_fixtures.MissingCollection"
    fields = {"note": {"type": "textarea", "label": "Note"}}
