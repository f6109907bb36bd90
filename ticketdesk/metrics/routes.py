# ticketdesk/metrics/routes.py
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ticketdesk.core.database import get_db
from ticketdesk.core.deps import get_current_user
from ticketdesk.metrics import services as metrics_service
from ticketdesk.metrics.schemas import TicketMetrics, TimeFormat
from ticketdesk.user.models import User

# shares the /api/tickets prefix; must be included before the ticket router
router = APIRouter(prefix="/api/tickets", tags=["Metrics"])


@router.get("/metrics", response_model=TicketMetrics)
def metrics(
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    time_format: TimeFormat = Query(default=TimeFormat.DAY),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return metrics_service.compute_metrics(db, current_user, start_date, end_date, time_format)
