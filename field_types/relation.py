"""Field types whose options live behind another endpoint"""

from typing import Any

from field_types.base_field_type import FieldType, field_type


@field_type("relation", "Relation", category="relational", icon="diagram-project")
class RelationFieldType(FieldType):
    ui_component = "RelationField"
    template = "fields/async_select.html"
    column_type = "BIGINT UNSIGNED"

    def get_source_config(self, field) -> dict[str, Any]:
        relation = field.attributes.relation
        return relation.model_dump(by_alias=True) if relation else {}

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        context["source"] = self.get_source_config(field)
        context["placeholder"] = context["source"].get("placeholder") or context["placeholder"]
        return context

    def get_form_input_config(self, field) -> dict[str, Any]:
        config = super().get_form_input_config(field)
        config["props"]["source"] = self.get_source_config(field)
        return config


@field_type("user", "User", category="relational", icon="user")
class UserFieldType(RelationFieldType):
    ui_component = "UserField"
    default_endpoint = "wp/v2/users"

    def get_source_config(self, field) -> dict[str, Any]:
        attributes = field.attributes
        return {
            "endpoint": attributes.get("endpoint", self.default_endpoint),
            "roles": attributes.get("roles", []),
            "resultsPerPage": attributes.get("resultsPerPage", 10),
            "minSearchLength": attributes.get("minSearchLength", 2),
            "placeholder": attributes.placeholder or "Search...",
        }


@field_type("post_object", "Post Object", category="relational", icon="file-lines")
class PostObjectFieldType(UserFieldType):
    ui_component = "PostObjectField"
    default_endpoint = "wp/v2/posts"

    def get_source_config(self, field) -> dict[str, Any]:
        source = super().get_source_config(field)
        source.pop("roles")
        source["postTypes"] = field.attributes.get("postTypes", ["post"])
        source["status"] = field.attributes.get("status", "publish")
        return source
