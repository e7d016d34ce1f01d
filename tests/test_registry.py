"""Tests for the tool registry: catalogue, validation and dispatch."""

import pytest

from errors.exceptions import ToolArgumentError, UnknownToolError
from services.metrics import get_metrics_collector
from tools.registry import get_registered_tools

EXPECTED_TOOLS = {
    "list_files",
    "search_files",
    "open_file",
    "copy_section",
    "fetch_google_doc",
    "create_document",
    "update_document",
    "create_enlighten_assignment",
}


def test_catalogue_is_complete(registry):
    assert set(registry.names()) == EXPECTED_TOOLS
    for definition in registry.anthropic_tools():
        assert set(definition) == {"name", "description", "input_schema"}
        assert definition["input_schema"]["type"] == "object"


def test_schema_required_fields_match_argument_models():
    for name, tool in get_registered_tools().items():
        required_in_schema = set(tool.input_schema.get("required", []))
        required_in_model = {
            field.alias or field_name
            for field_name, field in tool.args_model.model_fields.items()
            if field.is_required()
        }
        assert required_in_schema == required_in_model, name


@pytest.mark.asyncio
async def test_unknown_tool(registry):
    with pytest.raises(UnknownToolError) as exc_info:
        await registry.execute("delete_everything", {})
    assert exc_info.value.tool_name == "delete_everything"


@pytest.mark.asyncio
async def test_missing_required_argument_fails_closed(registry, google_docs):
    with pytest.raises(ToolArgumentError) as exc_info:
        await registry.execute("fetch_google_doc", {})
    assert any("fileId" in problem for problem in exc_info.value.problems)
    google_docs.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_enum_value(registry):
    with pytest.raises(ToolArgumentError):
        await registry.execute("list_files", {"fileType": "podcast"})


@pytest.mark.asyncio
async def test_execute_records_metrics(registry):
    await registry.execute("list_files", {})
    await registry.execute("open_file", {"fileId": "nope"})
    tools = get_metrics_collector().snapshot()["tools"]
    assert tools["list_files"]["status_breakdown"] == {"ok": 1}
    assert tools["open_file"]["status_breakdown"] == {"lookup_error": 1}
