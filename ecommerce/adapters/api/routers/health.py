# ecommerce/adapters/api/routers/health.py
from fastapi import APIRouter, Depends, status, Response
from typing import Dict
import structlog

from ecommerce.shared.container import Container
from ecommerce.adapters.api.dependencies import get_container

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["System"])

@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """
    K8s Liveness Probe.
    Returns 200 OK if the process is serving requests.
    """
    return {"status": "ok", "service": "ecommerce-backend"}

@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(
    response: Response,
    container: Container = Depends(get_container),
) -> Dict[str, str]:
    """
    K8s Readiness Probe.
    Checks every store (users, orders, products).
    Returns 503 Service Unavailable if any of them is down.
    """
    stores = {
        "users": container.user_repository,
        "orders": container.order_repository,
        "products": container.product_repository,
    }
    health_status = {name: "down" for name in stores}

    for name, provider in stores.items():
        try:
            if await provider().health_check():
                health_status[name] = "up"
        except Exception as e:
            logger.error("health_check_failed", component=name, error=str(e))

    is_healthy = all(state == "up" for state in health_status.values())

    if not is_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed", status=health_status)

    return health_status
