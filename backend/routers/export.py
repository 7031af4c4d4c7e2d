"""Export API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from models.diff import DiffRequest
from routers.diff import build_engine, run_diff
from services.config_manager import ConfigManager
from services.exporters import EXPORT_FORMATS, DiffExporter

router = APIRouter()


@router.post("/{fmt}")
async def export_diff(fmt: str, request: DiffRequest, context: bool = False) -> Response:
    """Export the diff of two configuration documents as a downloadable report"""
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported export format '{fmt}' (expected one of: {', '.join(EXPORT_FORMATS)})",
        )

    _, shown, stats = run_diff(build_engine(request), context)

    export_config = ConfigManager.get_instance().get_config().get("export", {})
    content = DiffExporter(shown, stats).export(fmt, export_config.get("maxPdfLines", 200))

    extension, media_type = EXPORT_FORMATS[fmt]
    filename = f"{export_config.get('filename', 'config_diff')}.{extension}"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
