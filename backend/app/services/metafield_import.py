"""Metafield definition import: header validation, row processing, result shaping.

Rows are handled strictly in input order, one Admin API call at a time, and
each row produces exactly one log line. Only structural problems (unparseable
file, no rows, missing headers) make the overall status "error".
"""
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from app.schemas.imports import ImportResponse, MetafieldRow, OutcomeKind, RowOutcome
from app.services.csv_decoder import CsvDecodeError, decode_csv
from app.services.metafield_mutations import (
    METAFIELD_DEFINITION_CREATE,
    OPERATION,
    build_definition_input,
    render_inline_mutation,
)

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ["Name", "Key", "Type"]

NO_FILE_LOG = ["❌ No file uploaded"]
EMPTY_FILE_LOG = ["❌ CSV file is empty"]
INVALID_FORMAT_LOG = [
    "❌ Invalid CSV format.",
    "This app only accepts a Metafield Definitions CSV.",
    "Required columns:",
    "Name, Key, Type, Description",
]
SKIPPED_LINE = "⚠️ Skipped row — missing name/key/type"


class GraphQLClient(Protocol):
    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]: ...


# ─── Validation ───

def missing_headers(rows: list[dict[str, str]]) -> list[str]:
    """Required columns absent from the first row. Exact, case-sensitive match."""
    headers = set(rows[0].keys()) if rows else set()
    return [h for h in REQUIRED_HEADERS if h not in headers]


def validate_row(row: Mapping[str, str | None]) -> MetafieldRow | None:
    """Trim a raw row; None when name, key or type is empty."""
    name = (row.get("Name") or "").strip()
    key = (row.get("Key") or "").strip()
    type_ = (row.get("Type") or "").strip()
    description = (row.get("Description") or "").strip()
    if not name or not key or not type_:
        return None
    return MetafieldRow(name=name, key=key, type=type_, description=description)


# ─── Response interpretation ───

def interpret_response(row: MetafieldRow, body: dict[str, Any]) -> RowOutcome:
    """Map a metafieldDefinitionCreate response onto one log line."""
    data = body.get("data") or {}
    result = data.get(OPERATION) or {}
    created = result.get("createdDefinition")
    errors = result.get("userErrors") or []

    if created:
        return RowOutcome(kind=OutcomeKind.CREATED, message=f"✅ Created metafield: {row.name} ({row.key})")
    if errors:
        messages = ", ".join(str(e.get("message", "")) for e in errors)
        return RowOutcome(kind=OutcomeKind.USER_ERRORS, message=f"⚠️ {row.name} → {messages}")
    return RowOutcome(kind=OutcomeKind.UNKNOWN, message=f"⚠️ Unknown response for {row.name}")


# ─── Row processor ───

async def create_definition(
    row: MetafieldRow,
    client: GraphQLClient,
    *,
    namespace: str,
    owner_type: str,
) -> RowOutcome:
    """Send one metafieldDefinitionCreate mutation. Never raises."""
    variables = build_definition_input(row, namespace=namespace, owner_type=owner_type)
    try:
        body = await client.graphql(METAFIELD_DEFINITION_CREATE, variables)
        return interpret_response(row, body)
    except Exception as exc:
        logger.warning("Metafield definition create failed for key=%s: %s", row.key, exc)
        return RowOutcome(kind=OutcomeKind.TRANSPORT_FAILURE, message=f"❌ Failed for {row.name} → {exc}")


async def process_rows(
    rows: list[dict[str, str]],
    client: GraphQLClient,
    *,
    namespace: str,
    owner_type: str,
) -> list[RowOutcome]:
    outcomes: list[RowOutcome] = []
    for idx, raw in enumerate(rows, start=2):  # row 1 = header
        row = validate_row(raw)
        if row is None:
            logger.info("Skipping CSV row %d: missing name/key/type", idx)
            outcomes.append(RowOutcome(kind=OutcomeKind.SKIPPED, message=SKIPPED_LINE))
            continue
        outcomes.append(await create_definition(row, client, namespace=namespace, owner_type=owner_type))
    return outcomes


def preview_rows(rows: list[dict[str, str]], *, namespace: str, owner_type: str) -> list[str]:
    """Dry run: the inline mutation each row would send, no network calls."""
    lines = []
    for raw in rows:
        row = validate_row(raw)
        lines.append(SKIPPED_LINE if row is None else render_inline_mutation(row, namespace, owner_type))
    return lines


# ─── Orchestration ───

def _error(log: list[str]) -> ImportResponse:
    return ImportResponse(status="error", log=list(log))


def load_rows(content: bytes) -> tuple[list[dict[str, str]], ImportResponse | None]:
    """Decode and structurally validate; the second item is set on failure."""
    try:
        rows = decode_csv(content)
    except CsvDecodeError as exc:
        logger.info("Rejected upload: %s", exc)
        return [], _error(["❌ Could not parse CSV file.", str(exc)])

    if not rows:
        return [], _error(EMPTY_FILE_LOG)

    missing = missing_headers(rows)
    if missing:
        logger.info("Rejected upload: missing columns %s", ", ".join(missing))
        return [], _error(INVALID_FORMAT_LOG)

    return rows, None


def summarize(outcomes: list[RowOutcome]) -> ImportResponse:
    created = sum(1 for o in outcomes if o.kind == OutcomeKind.CREATED)
    skipped = sum(1 for o in outcomes if o.kind == OutcomeKind.SKIPPED)
    return ImportResponse(
        status="success",
        log=[o.message for o in outcomes],
        created=created,
        skipped=skipped,
        failed=len(outcomes) - created - skipped,
    )


async def run_import(
    content: bytes,
    client: GraphQLClient,
    *,
    namespace: str,
    owner_type: str,
) -> ImportResponse:
    rows, failure = load_rows(content)
    if failure is not None:
        return failure

    logger.info("Importing %d metafield definition rows into namespace=%s", len(rows), namespace)
    outcomes = await process_rows(rows, client, namespace=namespace, owner_type=owner_type)
    result = summarize(outcomes)
    logger.info(
        "Metafield import finished: created=%d failed=%d skipped=%d",
        result.created, result.failed, result.skipped,
    )
    return result


def run_preview(content: bytes, *, namespace: str, owner_type: str) -> ImportResponse:
    rows, failure = load_rows(content)
    if failure is not None:
        return failure
    return ImportResponse(status="success", log=preview_rows(rows, namespace=namespace, owner_type=owner_type))
