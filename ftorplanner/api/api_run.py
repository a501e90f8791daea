from fastapi import FastAPI, Request, Query
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.api.routes import meals, recipes, shopping, ingredients, settings, backup
from ftorplanner.utilities.errors import (
    StorageError, ValidationError, NotFoundError
)

# Logging
logger = logging.getLogger("ftorplanner_app")


# -------------------- Error mapping --------------------
async def _not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc), "field": exc.field})


async def _storage_handler(request: Request, exc: StorageError):
    # state stays untouched; the client can retry
    logger.error("Storage failure on %s %s: %s (cause: %r)",
                 request.method, request.url.path, exc, exc.__cause__)
    return JSONResponse(status_code=503, content={"detail": "Storage is unavailable, please try again."})


def create_app(services: Optional[AppServices] = None) -> FastAPI:
    app = FastAPI(title="FtorPlanner API")
    app.state.services = services or AppServices()

    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(StorageError, _storage_handler)

    app.include_router(meals.router)
    app.include_router(recipes.router)
    app.include_router(shopping.router)
    app.include_router(ingredients.router)
    app.include_router(settings.router)
    app.include_router(backup.router)

    @app.get('/api/events')
    def recent_events(request: Request, since: Optional[int] = Query(default=None)):
        """Poll recent domain events (language changes, imports, ...)."""
        return get_services(request).recent_events.get_events(since)

    return app


app = create_app()
