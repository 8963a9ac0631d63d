"""Rich text field types.

The editors themselves are client widgets; on the server these render a
textarea tagged with the editor to mount.
"""

from typing import Any

from field_types.text import TextareaFieldType
from field_types.base_field_type import field_type


@field_type("wysiwyg", "WYSIWYG Editor", category="content", icon="pen-nib")
class WysiwygFieldType(TextareaFieldType):
    ui_component = "WysiwygField"
    template = "fields/rich_text.html"
    editor = "wysiwyg"

    def get_render_context(self, field, value=None) -> dict[str, Any]:
        context = super().get_render_context(field, value)
        context["editor"] = self.editor
        return context


@field_type("markdown", "Markdown", category="content", icon="markdown")
class MarkdownFieldType(WysiwygFieldType):
    ui_component = "MarkdownField"
    editor = "markdown"
