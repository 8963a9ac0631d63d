from client.api import ApiError, SchemaApiClient
from client.dynamic_form import DynamicForm, FormState
from client.form_controller import FormController
from client.form_store import FormStore
from client.validation_schema import build_validation_model

__all__ = [
    "ApiError",
    "SchemaApiClient",
    "DynamicForm",
    "FormState",
    "FormController",
    "FormStore",
    "build_validation_model",
]
