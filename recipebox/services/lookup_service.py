"""Autocomplete listings for tags and equipment (no pagination)."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Tag, Equipment
from ..schemas import TagOut, EquipmentOut
from ..settings import settings
from .queries import active


def _search_term(raw: Optional[str]) -> Optional[str]:
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower()


def list_tags(db: Session, search_term: Optional[str] = None) -> list[TagOut]:
    query = active(db, Tag)

    term = _search_term(search_term)
    if term:
        query = query.filter(
            func.similarity(func.lower(Tag.name), term) > settings.lookup_search_threshold
        )

    tags = query.order_by(Tag.tag_type, Tag.name).all()
    return [TagOut.model_validate(t) for t in tags]


def list_equipment(db: Session, search_term: Optional[str] = None) -> list[EquipmentOut]:
    query = active(db, Equipment)

    term = _search_term(search_term)
    if term:
        query = query.filter(
            func.similarity(func.lower(Equipment.name), term) > settings.lookup_search_threshold
        )

    equipment = query.order_by(Equipment.name).all()
    return [EquipmentOut.model_validate(e) for e in equipment]
