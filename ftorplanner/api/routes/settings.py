import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.logic.settings.aggregator import SettingsResult
from ftorplanner.utilities.validators import SettingsUpdateInput, LanguageInput

router = APIRouter(prefix="/api/settings", tags=["settings"])
logger = logging.getLogger(__name__)


def _result_response(result: SettingsResult):
    if result.ok:
        return result.settings.to_dict()
    # rejected update: hand back the unchanged settings so the UI can reset its toggles
    return JSONResponse(status_code=409, content={
        "detail": str(result.error),
        "settings": result.settings.to_dict(),
    })


@router.get("")
async def get_settings(services: AppServices = Depends(get_services)):
    settings = await services.settings.get()
    return settings.to_dict()


@router.patch("")
async def update_settings(payload: SettingsUpdateInput, services: AppServices = Depends(get_services)):
    result = await services.settings.set(payload.model_dump(exclude_none=True))
    return _result_response(result)


@router.put("/language")
async def set_language(payload: LanguageInput, services: AppServices = Depends(get_services)):
    result = await services.settings.set_language(payload.language)
    logger.info("Language set to %s (rtl=%s)", result.settings.language, result.settings.is_rtl)
    return _result_response(result)
