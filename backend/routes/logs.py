# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import datetime

from database import get_db
from models.log import Log
from schemas.base import ORMBase

router = APIRouter(prefix="/logs", tags=["Logs"])

# --- SCHEMAS ---
class LogResponse(ORMBase):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

class LogPage(ORMBase):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int

# --- ENDPOINT ---
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    action: Optional[str] = Query(None, description="Filter by action"),
    resource: Optional[str] = Query(None, description="Filter by resource"),
    status: Optional[str] = Query(None, description="Filter by status (SUCCESS/FAIL)"),
    date_from: Optional[str] = Query(None, alias="dateFrom", description="From date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="To date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))
    if status:
        query = query.filter(Log.status == status)

    # Malformed dates are ignored
    if date_from:
        try:
            query = query.filter(Log.ts >= datetime.fromisoformat(date_from))
        except ValueError:
            pass

    if date_to:
        try:
            dt_to_str = date_to
            # Cover the whole final day for YYYY-MM-DD input
            if len(dt_to_str) == 10:
                dt_to_str += " 23:59:59"
            query = query.filter(Log.ts <= datetime.fromisoformat(dt_to_str))
        except ValueError:
            pass

    query = query.order_by(Log.ts.desc(), Log.id.desc())

    total = query.count()
    logs = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": logs,
        "total": total,
        "page": page,
        "page_size": page_size,
    }
