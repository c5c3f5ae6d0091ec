import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db

router = APIRouter()
logger = logging.getLogger("recipebox.health")


@router.get("/health")
def health(db: Session = Depends(get_db)):
    database_ok = False
    try:
        db.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError as e:
        logger.warning(f"Health check database probe failed: {e}")
    return {"ok": True, "database_ok": database_ok}
