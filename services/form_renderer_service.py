"""Form Renderer Service - server-rendered forms and dynamic form mount points"""

from typing import Any, Mapping, Optional

from markupsafe import Markup

from core.settings import settings
from core.templating import render_template
from schemas.resolved_schema import ResolvedSchema
from services.field_type_registry import FieldTypeRegistry, get_field_type_registry
from services.schema_resolver import SchemaResolver, get_schema_resolver
from services.validation_service import build_field_definitions

DEFAULT_OPTIONS = {
    "method": "POST",
    "successMessage": "Saved successfully!",
    "submittingText": "Saving...",
    "resetOnSuccess": True,
}

FORM_MODES = ("create", "edit")

SUBMITTING_TEXT = {"create": "Creating...", "edit": "Updating..."}


class FormRendererService:
    """
    Renders resolved schemas as HTML.

    The static form is plain markup plus a JSON config for the form
    controller; the mount point is an empty element the dynamic form
    attaches to.
    """

    def __init__(
        self,
        resolver: Optional[SchemaResolver] = None,
        field_type_registry: Optional[FieldTypeRegistry] = None,
    ):
        self.resolver = resolver or get_schema_resolver()
        self.field_type_registry = field_type_registry or get_field_type_registry()

    def visible_fields(self, resolved: ResolvedSchema):
        return [
            field for field in build_field_definitions(resolved, self.field_type_registry)
            if not field.is_hidden()
        ]

    def build_form_config(
        self,
        resolved: ResolvedSchema,
        form_id: Optional[str] = None,
        endpoint: Optional[str] = None,
        nonce: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Config consumed by the vanilla form controller"""
        return {
            "formId": form_id or self.default_form_id(resolved.key),
            "fields": [
                {
                    "name": field.key,
                    "type": field.type,
                    "label": field.get_label(),
                    "required": field.is_required(),
                    "validation": field.get_validation().to_dict(),
                }
                for field in self.visible_fields(resolved)
            ],
            "endpoint": endpoint if endpoint is not None else (resolved.endpoint or ""),
            "nonce": nonce,
            "options": {**DEFAULT_OPTIONS, **(options or {})},
        }

    def render(
        self,
        resolved: ResolvedSchema,
        data: Optional[Mapping[str, Any]] = None,
        form_id: Optional[str] = None,
        endpoint: Optional[str] = None,
        nonce: str = "",
        options: Optional[Mapping[str, Any]] = None,
        submit_label: str = "Submit",
    ) -> Markup:
        """Render a static form in fillable order, hidden fields skipped"""
        data = data or {}
        config = self.build_form_config(resolved, form_id, endpoint, nonce, options)
        fields = [field.render(data.get(field.key)) for field in self.visible_fields(resolved)]
        return render_template(
            "forms/form.html",
            form_id=config["formId"],
            schema_key=resolved.key,
            endpoint=config["endpoint"],
            fields=fields,
            options=config["options"],
            submit_label=submit_label,
            config=config,
        )

    def render_form(
        self,
        mode: str,
        key: str,
        data: Optional[Mapping[str, Any]] = None,
        record_id: Any = None,
        title: Optional[str] = None,
        submit_text: Optional[str] = None,
        nonce: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> Markup:
        """
        Render a complete create or edit page for a schema.

        Edit mode PUTs to ``{endpoint}/{record_id}`` and pre-fills the
        inputs from ``data``; create mode POSTs and resets after success.
        """
        if mode not in FORM_MODES:
            raise ValueError(f"Unknown form mode '{mode}'; expected one of {', '.join(FORM_MODES)}")

        resolved = self.resolver.resolve(key)
        if not resolved.fields:
            return render_template("forms/error.html", message=f"No fields defined for {key} collection.")

        endpoint = resolved.endpoint or ""
        if mode == "edit" and record_id is not None:
            endpoint = f"{endpoint}/{record_id}"

        mode_label = mode.capitalize()
        form_options = {
            "method": "PUT" if mode == "edit" else "POST",
            "successMessage": f"{mode_label} successful!",
            "submittingText": SUBMITTING_TEXT[mode],
            "resetOnSuccess": mode == "create",
            **(options or {}),
        }
        form = self.render(
            resolved,
            data=data if mode == "edit" else None,
            endpoint=endpoint,
            nonce=nonce,
            options=form_options,
            submit_label=submit_text or mode_label,
        )
        return render_template(
            "forms/page.html",
            mode=mode,
            title=title or f"{mode_label} {resolved.name.removesuffix('Schema') or key.capitalize()}",
            form=form,
        )

    def render_mount_point(
        self,
        key: str,
        record_id: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Markup:
        """Empty element the dynamic form mounts on"""
        return render_template(
            "forms/mount_point.html",
            schema_key=key,
            record_id=record_id,
            attributes=dict(attributes or {}),
            schema_endpoint=f"{settings.API_PREFIX}/schemas/{key}",
        )

    def render_shortcode(self, atts: Mapping[str, Any]) -> Markup:
        """``[blueprint_form schema="ticket" record_id="2" class="..." id="..."]``"""
        schema = atts.get("schema")
        if not schema:
            return render_template("forms/error.html", message="No schema specified.")

        attributes = {name: atts[name] for name in ("class", "id") if atts.get(name)}
        record_id = atts.get("record_id")
        return self.render_mount_point(schema, int(record_id) if record_id else None, attributes)

    @staticmethod
    def default_form_id(key: str) -> str:
        return f"arc-{key.replace('_', '-')}-form"
