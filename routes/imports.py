"""
Bulk CSV import API routes.

Upload → preview (every row classified) → confirm with a policy.
"""

from fastapi import APIRouter, UploadFile, File
from fastapi.responses import JSONResponse, Response
import structlog

from config import settings
from models.csv_import import (
    ImportPreviewResponse,
    ImportConfirmRequest,
    ImportConfirmResponse,
)
from parsers.csv_parser import CSV_TEMPLATE, parse_card_csv, read_csv_upload, summarize_rows
from services.session_service import get_session_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Bulk Import"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/imports/template")
async def download_template():
    """
    Download the CSV import template.

    Header plus two example rows, byte-for-byte what spreadsheet users expect.
    """
    return Response(
        content=CSV_TEMPLATE.encode("utf-8"),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.csv_template_filename}"'
        }
    )


@router.post("/sessions/{session_id}/imports/preview", response_model=ImportPreviewResponse)
async def preview_import(session_id: str, file: UploadFile = File(...)):
    """
    Parse an uploaded CSV and classify every row.

    Nothing is committed until /imports/confirm. A new upload replaces
    the previous preview.

    Raises:
        422: Not a .csv file, or not readable text
    """
    logger.info(
        "csv_upload_started",
        session_id=session_id,
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        session = get_session_service().get(session_id)

        content = await file.read()
        text = read_csv_upload(file.filename, content)
        rows = parse_card_csv(text, session.existing)

        preview_id = session.hold_preview(file.filename, rows)

        return ImportPreviewResponse(
            preview_id=preview_id,
            filename=file.filename,
            rows=rows,
            summary=summarize_rows(rows),
            expires_in_minutes=settings.preview_ttl_minutes
        )

    except Exception as e:
        return handle_error(e)


@router.post("/sessions/{session_id}/imports/confirm", response_model=ImportConfirmResponse)
async def confirm_import(session_id: str, data: ImportConfirmRequest):
    """
    Commit rows from a preview.

    valid_only imports valid rows; include_duplicates also imports
    duplicate rows. Error rows are never imported.
    """
    try:
        session = get_session_service().get(session_id)
        imported = session.confirm_import(data.preview_id, data.policy)

        return ImportConfirmResponse(
            success=True,
            imported_count=imported,
            session_card_count=len(session.ledger),
            message=f"Successfully imported {imported} cards"
        )

    except Exception as e:
        return handle_error(e)
