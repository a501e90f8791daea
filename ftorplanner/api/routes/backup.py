from typing import Any
from fastapi import APIRouter, Body, Depends

from ftorplanner.api.services import AppServices, get_services

router = APIRouter(prefix="/api/backup", tags=["backup"])


@router.get("/export")
async def export_backup(services: AppServices = Depends(get_services)):
    """Return the backup document ({version, exportDate, data})."""
    return await services.exporter.export()


@router.post("/export-file")
async def export_backup_file(services: AppServices = Depends(get_services)):
    path = await services.exporter.export_to_file()
    return {"path": str(path), "file_name": path.name}


@router.post("/import")
async def import_backup(document: Any = Body(...), services: AppServices = Depends(get_services)):
    """Replace stored data with the document's; a malformed document changes nothing."""
    keys = await services.importer.import_document(document)
    return {"imported": keys, "count": len(keys)}
