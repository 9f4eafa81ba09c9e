import logging

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_http_client
from app.core.config import settings
from app.core.metrics import observe_proxy_request

logger = logging.getLogger(__name__)

router = APIRouter()

JOBS_ERROR_PAYLOAD = {"error": "Failed to fetch jobs"}


@router.get("")
async def list_jobs(client: httpx.AsyncClient = Depends(get_http_client)):
    """
    Relay the scraper backend's job list verbatim.

    Single attempt: any transport error or non-JSON body becomes a 500 with
    a fixed payload. The original error is only logged.
    """
    try:
        response = await client.get(f"{settings.scraper_api_root}/api/jobs")
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Jobs API error: %s", e)
        observe_proxy_request("jobs", "error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=JOBS_ERROR_PAYLOAD,
        )

    observe_proxy_request("jobs", "success")
    return JSONResponse(content=data)
