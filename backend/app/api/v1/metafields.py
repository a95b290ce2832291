"""CSV import endpoint for product metafield definitions."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.core.config import settings
from app.core.deps import require_role
from app.schemas.auth import Operator
from app.schemas.imports import ImportResponse
from app.services.metafield_import import NO_FILE_LOG, run_import, run_preview
from app.services.shopify_admin import ShopifyAdminClient, get_admin_client

logger = logging.getLogger(__name__)

router = APIRouter()


# ─── POST /metafields/import ───

@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Create product metafield definitions from a CSV upload (ADMIN)",
)
async def import_metafield_definitions(
    current_user: Annotated[Operator, Depends(require_role("ADMIN"))],
    client: Annotated[ShopifyAdminClient, Depends(get_admin_client)],
    file: UploadFile | None = File(None),
    dry_run: bool = Query(False, description="Render the mutations without calling the Admin API"),
):
    if file is None or not file.filename:
        return ImportResponse(status="error", log=list(NO_FILE_LOG))

    content = await file.read()
    logger.info(
        "Metafield CSV upload by %s: filename=%s bytes=%d dry_run=%s",
        current_user.email, file.filename, len(content), dry_run,
    )

    if dry_run:
        return run_preview(
            content,
            namespace=settings.METAFIELD_NAMESPACE,
            owner_type=settings.METAFIELD_OWNER_TYPE,
        )

    return await run_import(
        content,
        client,
        namespace=settings.METAFIELD_NAMESPACE,
        owner_type=settings.METAFIELD_OWNER_TYPE,
    )
