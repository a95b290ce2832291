"""Tests for the metafield definition import pipeline.

The Admin API is replaced by a fake client that records every call, so the
tests can assert both the log lines and how many network calls were made.
"""
import pytest

from app.services.metafield_import import (
    EMPTY_FILE_LOG,
    INVALID_FORMAT_LOG,
    SKIPPED_LINE,
    missing_headers,
    run_import,
    run_preview,
    validate_row,
)
from app.services.shopify_admin import ShopifyAdminError


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _created(name: str, key: str) -> dict:
    return {
        "data": {
            "metafieldDefinitionCreate": {
                "createdDefinition": {"id": "gid://shopify/MetafieldDefinition/1", "name": name, "key": key},
                "userErrors": [],
            }
        }
    }


def _user_errors(*messages: str) -> dict:
    return {
        "data": {
            "metafieldDefinitionCreate": {
                "createdDefinition": None,
                "userErrors": [{"field": ["definition", "key"], "message": m} for m in messages],
            }
        }
    }


class FakeAdminClient:
    """Returns (or raises) queued responses in order and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    async def graphql(self, query, variables=None):
        self.calls.append((query, variables))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


async def _run(content: bytes, client: FakeAdminClient):
    return await run_import(content, client, namespace="custom", owner_type="PRODUCT")


# ─── Tests ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_created_row_log_line():
    client = FakeAdminClient(_created("Color", "color"))

    result = await _run(b"Name,Key,Type,Description\nColor,color,single_line_text_field,\n", client)

    assert result.status == "success"
    assert result.log == ["✅ Created metafield: Color (color)"]
    assert result.created == 1
    definition = client.calls[0][1]["definition"]
    assert definition["namespace"] == "custom"
    assert definition["ownerType"] == "PRODUCT"
    assert definition["description"] == ""


@pytest.mark.asyncio
async def test_user_errors_row_log_line():
    client = FakeAdminClient(_user_errors("Key already exists"))

    result = await _run(b"Name,Key,Type,Description\nColor,color,single_line_text_field,\n", client)

    assert result.status == "success"
    assert result.log == ["⚠️ Color → Key already exists"]
    assert result.failed == 1


@pytest.mark.asyncio
async def test_multiple_user_errors_are_joined():
    client = FakeAdminClient(_user_errors("Key is too short", "Type is invalid"))

    result = await _run(b"Name,Key,Type\nColor,c,nope\n", client)

    assert result.log == ["⚠️ Color → Key is too short, Type is invalid"]


@pytest.mark.asyncio
async def test_unrecognized_response_shape():
    client = FakeAdminClient(
        {"data": {"metafieldDefinitionCreate": {"createdDefinition": None, "userErrors": []}}},
        {"data": {}},
    )

    result = await _run(b"Name,Key,Type\nColor,color,x\nSize,size,y\n", client)

    assert result.log == ["⚠️ Unknown response for Color", "⚠️ Unknown response for Size"]


@pytest.mark.asyncio
async def test_transport_failure_is_recovered_and_processing_continues():
    client = FakeAdminClient(ShopifyAdminError("Throttled"), _created("Size", "size"))

    result = await _run(b"Name,Key,Type\nColor,color,x\nSize,size,y\n", client)

    assert result.status == "success"
    assert result.log == ["❌ Failed for Color → Throttled", "✅ Created metafield: Size (size)"]
    assert len(client.calls) == 2
    assert (result.created, result.failed, result.skipped) == (1, 1, 0)


@pytest.mark.asyncio
async def test_rows_with_blank_required_fields_are_skipped_without_calls():
    client = FakeAdminClient(_created("Size", "size"))
    content = (
        b"Name,Key,Type,Description\n"
        b"   ,color,single_line_text_field,\n"
        b"Weight,,number_integer,\n"
        b"Size,size,number_integer,Shoe size\n"
        b"Care,care,  ,\n"
    )

    result = await _run(content, client)

    assert result.log == [
        SKIPPED_LINE,
        SKIPPED_LINE,
        "✅ Created metafield: Size (size)",
        SKIPPED_LINE,
    ]
    assert len(client.calls) == 1
    assert result.skipped == 3


@pytest.mark.asyncio
async def test_log_has_one_line_per_row_in_input_order():
    keys = [f"field_{i}" for i in range(6)]
    client = FakeAdminClient(*[_created(k.title(), k) for k in keys])
    content = "Name,Key,Type\n" + "".join(f"{k.title()},{k},single_line_text_field\n" for k in keys)

    result = await _run(content.encode(), client)

    assert len(result.log) == len(keys)
    assert result.log == [f"✅ Created metafield: {k.title()} ({k})" for k in keys]
    assert [c[1]["definition"]["key"] for c in client.calls] == keys


@pytest.mark.asyncio
async def test_values_are_trimmed_before_sending():
    client = FakeAdminClient(_created("Color", "color"))

    await _run(b"Name,Key,Type,Description\n  Color , color ,single_line_text_field,  Main  \n", client)

    definition = client.calls[0][1]["definition"]
    assert (definition["name"], definition["key"], definition["description"]) == ("Color", "color", "Main")


@pytest.mark.asyncio
async def test_missing_required_column_aborts_without_calls():
    client = FakeAdminClient()

    result = await _run(b"Name,Key,Description\nColor,color,Main\n", client)

    assert result.status == "error"
    assert result.log == INVALID_FORMAT_LOG
    assert client.calls == []


@pytest.mark.asyncio
async def test_header_match_is_case_sensitive():
    client = FakeAdminClient()

    result = await _run(b"name,key,type\nColor,color,x\n", client)

    assert result.status == "error"
    assert result.log == INVALID_FORMAT_LOG
    assert client.calls == []


@pytest.mark.asyncio
async def test_empty_csv_aborts_without_calls():
    client = FakeAdminClient()

    result = await _run(b"Name,Key,Type,Description\n", client)

    assert result.status == "error"
    assert result.log == EMPTY_FILE_LOG
    assert client.calls == []


@pytest.mark.asyncio
async def test_unparseable_csv_is_rejected_before_any_row():
    client = FakeAdminClient()

    result = await _run(b"Name,Key,Type\nColor,color,x\nSize,size\n", client)

    assert result.status == "error"
    assert result.log[0] == "❌ Could not parse CSV file."
    assert "expected 3 fields" in result.log[1]
    assert client.calls == []


@pytest.mark.asyncio
async def test_every_row_failing_still_reports_success():
    client = FakeAdminClient(_user_errors("Key already exists"), ShopifyAdminError("boom"))

    result = await _run(b"Name,Key,Type\nColor,color,x\nSize,size,y\n", client)

    assert result.status == "success"
    assert result.created == 0
    assert result.failed == 2


@pytest.mark.asyncio
async def test_resubmitting_same_csv_is_not_deduplicated():
    content = b"Name,Key,Type\nColor,color,single_line_text_field\n"
    client = FakeAdminClient(_created("Color", "color"), _user_errors("Key is in use"))

    first = await _run(content, client)
    second = await _run(content, client)

    assert first.log == ["✅ Created metafield: Color (color)"]
    assert second.log == ["⚠️ Color → Key is in use"]
    assert len(client.calls) == 2


def test_preview_renders_inline_mutations_without_calls():
    result = run_preview(
        b'Name,Key,Type\n"Size ""EU""",size,single_line_text_field\n,,\n',
        namespace="custom",
        owner_type="PRODUCT",
    )

    assert result.status == "success"
    assert 'name: "Size \\"EU\\""' in result.log[0]
    assert result.log[1] == SKIPPED_LINE


def test_validate_row_defaults_missing_description():
    row = validate_row({"Name": "Color", "Key": "color", "Type": "single_line_text_field"})

    assert row is not None
    assert row.description == ""


def test_missing_headers_ignores_extra_columns():
    rows = [{"Type": "x", "Extra": "y", "Key": "k", "Name": "n"}]

    assert missing_headers(rows) == []
    assert missing_headers([{"Name": "n"}]) == ["Key", "Type"]
    assert missing_headers([]) == ["Name", "Key", "Type"]
