"""Dynamic form: fetches a resolved schema and drives per-field components.

The form moves through these states::

    IDLE -> LOADING_SCHEMA -> SCHEMA_ERROR | SCHEMA_READY
    SCHEMA_READY -> LOADING_RECORD -> RECORD_ERROR | FORM_READY   (edit mode)
    SCHEMA_READY -> FORM_READY                                    (create mode)
    FORM_READY -> SUBMITTING -> FORM_READY | SUBMIT_SUCCESS

Pickers and sortable children load in their own tasks once the form is
ready and never hold the form back.
"""

import asyncio
from enum import Enum
from typing import Any, Optional
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from client.api import ApiError, SchemaApiClient
from client.components import AsyncFieldComponent, FieldComponent, build_component
from client.form_store import FormStore
from client.validation_schema import build_validation_model, first_errors
from core.exceptions import InvalidFieldConfigError, InvalidTransitionError
from core.logging_config import get_logger
from core.settings import settings
from schemas.resolved_schema import ResolvedSchema

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "An error occurred. Please try again."


class FormState(str, Enum):
    IDLE = "idle"
    LOADING_SCHEMA = "loading_schema"
    SCHEMA_ERROR = "schema_error"
    SCHEMA_READY = "schema_ready"
    LOADING_RECORD = "loading_record"
    RECORD_ERROR = "record_error"
    FORM_READY = "form_ready"
    SUBMITTING = "submitting"
    SUBMIT_SUCCESS = "submit_success"


TRANSITIONS = {
    FormState.IDLE: {FormState.LOADING_SCHEMA},
    FormState.LOADING_SCHEMA: {FormState.SCHEMA_ERROR, FormState.SCHEMA_READY},
    FormState.SCHEMA_ERROR: {FormState.LOADING_SCHEMA},
    FormState.SCHEMA_READY: {FormState.LOADING_RECORD, FormState.FORM_READY},
    FormState.LOADING_RECORD: {FormState.RECORD_ERROR, FormState.FORM_READY},
    FormState.RECORD_ERROR: {FormState.LOADING_RECORD},
    FormState.FORM_READY: {FormState.SUBMITTING},
    FormState.SUBMITTING: {FormState.FORM_READY, FormState.SUBMIT_SUCCESS},
    FormState.SUBMIT_SUCCESS: {FormState.SUBMITTING, FormState.FORM_READY},
}


class DynamicForm:
    def __init__(
        self,
        schema_key: str,
        api: SchemaApiClient,
        record_id: Any = None,
        rest_base: Optional[str] = None,
        success_message: str = "Saved successfully!",
    ):
        self.schema_key = schema_key
        self.api = api
        self.record_id = record_id
        self.rest_base = rest_base or settings.REST_BASE
        self.success_message = success_message

        self.state = FormState.IDLE
        self.store = FormStore()
        self.schema: Optional[ResolvedSchema] = None
        self.validation_model = None
        self.components: dict[str, FieldComponent] = {}
        self.error: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    @property
    def endpoint(self) -> Optional[str]:
        return self.schema.endpoint if self.schema else None

    def transition(self, target: FormState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.state.value, target.value)
        logger.debug(f"Form '{self.schema_key}': {self.state.value} -> {target.value}")
        self.state = target

    def absolute_url(self, endpoint: str) -> str:
        """Auxiliary endpoints may be given relative to the REST base"""
        if urlparse(endpoint).scheme:
            return endpoint
        return f"{self.rest_base}{endpoint.lstrip('/')}"

    # Lifecycle

    async def mount(self) -> FormState:
        if not await self.load_schema():
            return self.state
        if self.is_edit and not await self.load_record():
            return self.state
        if not self.is_edit:
            self.store.reset(self.default_values())
            self.transition(FormState.FORM_READY)
        self.start_auxiliary()
        return self.state

    async def load_schema(self) -> bool:
        self.transition(FormState.LOADING_SCHEMA)
        self.error = None
        try:
            data = await self.api.get_schema(self.schema_key)
        except ApiError as e:
            if e.status_code == 404:
                self.error = f"Schema '{self.schema_key}' not found."
            else:
                self.error = e.message
            self.transition(FormState.SCHEMA_ERROR)
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Failed to load schema '{self.schema_key}': {e}")
            self.error = NETWORK_ERROR_MESSAGE
            self.transition(FormState.SCHEMA_ERROR)
            return False

        try:
            schema = ResolvedSchema.model_validate(data)
            validation_model = build_validation_model(schema)
            components = self._build_components(schema)
        except (ValidationError, InvalidFieldConfigError) as e:
            logger.warning(f"Schema '{self.schema_key}' could not be built: {e}")
            self.error = f"Schema '{self.schema_key}' is invalid."
            self.transition(FormState.SCHEMA_ERROR)
            return False

        self.schema = schema
        self.validation_model = validation_model
        self.components = components
        self.transition(FormState.SCHEMA_READY)
        return True

    async def load_record(self) -> bool:
        self.transition(FormState.LOADING_RECORD)
        self.error = None
        try:
            record = await self.api.get_record(self.endpoint, self.record_id)
        except ApiError as e:
            self.error = e.message
            self.transition(FormState.RECORD_ERROR)
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Failed to load record {self.record_id} of '{self.schema_key}': {e}")
            self.error = NETWORK_ERROR_MESSAGE
            self.transition(FormState.RECORD_ERROR)
            return False

        values = self.default_values()
        for key, component in self.components.items():
            if key in record and component.submits_value:
                values[key] = component.coerce(record[key])
        self.store.reset(values)
        self.transition(FormState.FORM_READY)
        return True

    def start_auxiliary(self) -> list[asyncio.Task]:
        return [
            component.start()
            for component in self.components.values()
            if isinstance(component, AsyncFieldComponent)
        ]

    async def wait_auxiliary(self) -> None:
        """Wait for every auxiliary load in flight"""
        tasks = [
            component.task
            for component in self.components.values()
            if isinstance(component, AsyncFieldComponent) and component.task is not None
        ]
        await asyncio.gather(*tasks)

    async def unmount(self) -> None:
        """Cancel auxiliary loads; responses arriving afterwards are dropped"""
        tasks = []
        for component in self.components.values():
            if isinstance(component, AsyncFieldComponent) and component.task is not None:
                tasks.append(component.task)
                component.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass

    # Values

    def _build_components(self, schema: ResolvedSchema) -> dict[str, FieldComponent]:
        components = {}
        for key in schema.fillable:
            config = schema.fields.get(key, {})
            if config.get("hidden"):
                continue
            components[key] = build_component(key, config, self)
        return components

    def default_values(self) -> dict[str, Any]:
        values = {}
        for key, component in self.components.items():
            if not component.submits_value:
                continue
            default = component.attributes.default
            values[key] = component.coerce(default) if default is not None else component.empty_value()
        return values

    def set_value(self, key: str, raw: Any) -> None:
        self.components[key].set_value(raw)

    def submission_values(self) -> dict[str, Any]:
        return {
            key: component.submitted(self.store.get(key, component.empty_value()))
            for key, component in self.components.items()
            if component.submits_value
        }

    def validate(self) -> dict[str, str]:
        return first_errors(self.validation_model, self.submission_values())

    def validate_field(self, key: str) -> Optional[str]:
        error = self.validate().get(key)
        self.store.set_field_error(key, error)
        return error

    # Submit

    async def submit(self) -> bool:
        """Validate, then create or update the record.

        Returns True when the collection endpoint accepted the record.
        """
        if self.state not in (FormState.FORM_READY, FormState.SUBMIT_SUCCESS):
            raise InvalidTransitionError(self.state.value, FormState.SUBMITTING.value)

        self.store.clear_errors()
        errors = self.validate()
        if errors:
            self.store.set_errors(errors)
            return False

        if not self.endpoint:
            self.store.set_message("This form has no collection endpoint.", "error")
            return False

        values = self.submission_values()
        self.transition(FormState.SUBMITTING)
        try:
            if self.is_edit:
                await self.api.update_record(self.endpoint, self.record_id, values)
            else:
                await self.api.create_record(self.endpoint, values)
        except ApiError as e:
            self.store.set_errors({key: messages[0] for key, messages in e.field_errors.items() if messages})
            self.store.set_message(e.message, "error")
            self.transition(FormState.FORM_READY)
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Submitting '{self.schema_key}' failed: {e}")
            self.store.set_message(NETWORK_ERROR_MESSAGE, "error")
            self.transition(FormState.FORM_READY)
            return False

        if not self.is_edit:
            self.store.reset(self.default_values())
        self.store.set_message(self.success_message, "success")
        self.transition(FormState.SUBMIT_SUCCESS)
        return True

    def render_state(self) -> dict[str, Any]:
        message = self.store.message
        return {
            "state": self.state.value,
            "error": self.error,
            "message": {"text": message.text, "kind": message.kind} if message else None,
            "fields": [component.render_state() for component in self.components.values()],
        }
