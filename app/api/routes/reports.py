from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.report import VisitStats
from app.services.report_service import export_visits_csv, get_visit_stats

router = APIRouter()
settings = get_settings()


@router.get("/stats", response_model=VisitStats)
def stats(db: Session = Depends(get_db)):
    return get_visit_stats(db)


@router.get("/export/csv")
def export_csv(db: Session = Depends(get_db)):
    return Response(
        content=export_visits_csv(db),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={settings.CSV_EXPORT_FILENAME}"},
    )


if settings.LEGACY_EXPORT_ROUTE:
    # Older security dashboards still download from here.
    router.add_api_route("/visits/export", export_csv, methods=["GET"], deprecated=True)
