"""
Pass-through to the Arachne scraper API.

Backs the default relative analytics base ("/api/arachne"): the dashboard
reads /api/arachne/api/v1/analytics/... and this route forwards the call
to SCRAPER_API_URL unchanged.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_http_client
from app.core.config import settings
from app.core.metrics import observe_proxy_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{path:path}")
async def forward_to_scraper(
    path: str,
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    target = f"{settings.scraper_api_root}/{path}"
    try:
        upstream = await client.get(target, params=list(request.query_params.multi_items()))
    except httpx.HTTPError as e:
        logger.error("Scraper API unreachable (%s): %s", target, e)
        observe_proxy_request("arachne", "error")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "Failed to reach scraper API"},
        )

    observe_proxy_request("arachne", "success" if upstream.is_success else "upstream_error")
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type"),
    )
