"""
Export routes: all entries of all users as a CSV or JSON download.
"""
from fastapi import APIRouter, Depends, Response
from daydicated.services.app_controller import AppController
from daydicated.services.export_service import ExportFile
from daydicated.api.dependencies import get_controller, raise_for_failure

router = APIRouter(prefix="/export", tags=["export"])


def _download(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'}
    )


@router.get("/csv")
async def export_csv(controller: AppController = Depends(get_controller)):
    """Download every entry as CSV."""
    export = controller.handle_export_csv()
    if export is None:
        raise_for_failure(controller)
    return _download(export)


@router.get("/json")
async def export_json(controller: AppController = Depends(get_controller)):
    """Download every entry as JSON."""
    export = controller.handle_export_json()
    if export is None:
        raise_for_failure(controller)
    return _download(export)
