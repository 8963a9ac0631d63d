import json

import pytest
from typer.testing import CliRunner

import cli
import services.form_renderer_service as form_renderer_module

runner = CliRunner()


@pytest.mark.unit
class TestCli:

    @pytest.fixture(autouse=True)
    def _ticket_registry(self, monkeypatch, resolver):
        monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
        monkeypatch.setattr(cli, "get_schema_resolver", lambda: resolver)
        monkeypatch.setattr(form_renderer_module, "get_schema_resolver", lambda: resolver)

    def test_list_schemas(self):
        result = runner.invoke(cli.app, ["list-schemas"])

        assert result.exit_code == 0
        assert "ticket\tTicketSchema\t6 fields" in result.output
        assert "orphan\tOrphanSchema\t1 fields (no collection)" in result.output

    def test_show_schema(self):
        result = runner.invoke(cli.app, ["show-schema", "ticket"])

        assert result.exit_code == 0
        assert json.loads(result.output)["collection"]["model"]["table"] == "tickets"

    def test_show_unknown_schema(self):
        result = runner.invoke(cli.app, ["show-schema", "bogus"])

        assert result.exit_code == 1

    def test_migration(self):
        result = runner.invoke(cli.app, ["migration", "ticket"])

        assert result.exit_code == 0
        assert result.output.startswith("CREATE TABLE tickets (")

    def test_validate(self):
        """Test that validation errors set a failing exit code."""
        result = runner.invoke(cli.app, ["validate", "ticket", '{"title": "", "description": "x"}'])

        assert result.exit_code == 1
        assert json.loads(result.output) == {"title": ["Title is required"]}

    def test_validate_bad_json(self):
        result = runner.invoke(cli.app, ["validate", "ticket", "{nope"])

        assert result.exit_code == 2

    def test_render_edit_form(self):
        result = runner.invoke(
            cli.app, ["render-form", "ticket", "--mode", "edit", "--record-id", "2", "--record", '{"title": "Printer jam"}'],
        )

        assert result.exit_code == 0
        assert 'value="Printer jam"' in result.output
