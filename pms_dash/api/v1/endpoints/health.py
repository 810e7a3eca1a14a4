from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from pms_dash.core.config import settings
from pms_dash.db.session import get_db

router = APIRouter()


@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint. Reports whether the database answers.
    """
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        database = f"error: {e.__class__.__name__}"
    return {"status": "ok", "version": settings.VERSION, "database": database}
