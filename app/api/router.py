from fastapi import APIRouter
from app.api.endpoints import analytics, arachne, jobs

api_router = APIRouter()

# Pass-through routes to the scraper backend
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(arachne.router, prefix="/arachne", tags=["arachne"])

dashboard_router = APIRouter()
dashboard_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
