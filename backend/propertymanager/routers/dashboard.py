# backend/propertymanager/routers/dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..schemas import DashboardStatsOut
from ..services.dashboard import dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
def stats(db: Session = Depends(get_db), p=Depends(get_principal)):
    """Headline counts for the dashboard cards plus this month's collected revenue."""
    return dashboard_stats(db)
