from fastapi import APIRouter

from app.api.routes import checkin, health, hosts, reports, visits

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(hosts.router, prefix="/hosts", tags=["hosts"])
api_router.include_router(checkin.router, tags=["kiosk"])
api_router.include_router(visits.router, prefix="/visits", tags=["visits"])
api_router.include_router(reports.router, tags=["reports"])
