"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; dependency check for readiness.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from inventory_api.container import Container
from inventory_api.core.dependencies import get_container
from inventory_api.db.session import ping

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(container: Annotated[Container, Depends(get_container)]):
    """Liveness: is the process up?"""
    return {"status": "ok", "app": container.settings.app_name}


@router.get("/ready")
async def ready(container: Annotated[Container, Depends(get_container)]):
    """Readiness: can the configured store serve traffic?"""
    if container.engine is not None:
        try:
            await ping(container.engine)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("readiness check failed: %s", exc)
            return JSONResponse(status_code=503, content={"status": "unavailable", "backend": "sql"})
    return {"status": "ready", "backend": container.backend}
