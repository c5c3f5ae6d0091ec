"""Get-or-create for tags and equipment.

Names match case-insensitively after trimming (tags also match on type).
New rows keep the trimmed, original-case name. The existence check and the
insert are not atomic: a concurrent request may insert the same name first.
The partial unique indexes on lower(name) catch that; the insert runs inside
a SAVEPOINT so the violation can be absorbed by looking the row up again.
"""

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.text import clean_name, normalize_name
from ..enums import TagType
from ..models import Tag, Equipment, generate_uuid
from .queries import active

logger = logging.getLogger("recipebox.resolver")

E = TypeVar("E", Tag, Equipment)


def find_tag(db: Session, name: str, tag_type: TagType) -> Optional[Tag]:
    return (
        active(db, Tag)
        .filter(func.lower(Tag.name) == normalize_name(name), Tag.tag_type == tag_type)
        .first()
    )


def find_equipment(db: Session, name: str) -> Optional[Equipment]:
    return (
        active(db, Equipment)
        .filter(func.lower(Equipment.name) == normalize_name(name))
        .first()
    )


def get_or_create_tag(
    db: Session, name: str, tag_type: TagType, actor_id: Optional[str] = None
) -> Tag:
    display = clean_name(name)
    if not display:
        raise ValueError("Tag name cannot be blank")

    existing = find_tag(db, display, tag_type)
    if existing is not None:
        return existing

    tag = Tag(id=generate_uuid(), name=display, tag_type=tag_type, created_by=actor_id)
    return _insert_or_refetch(db, tag, lambda: find_tag(db, display, tag_type))


def get_or_create_equipment(
    db: Session, name: str, actor_id: Optional[str] = None
) -> Equipment:
    display = clean_name(name)
    if not display:
        raise ValueError("Equipment name cannot be blank")

    existing = find_equipment(db, display)
    if existing is not None:
        return existing

    equipment = Equipment(id=generate_uuid(), name=display, created_by=actor_id)
    return _insert_or_refetch(db, equipment, lambda: find_equipment(db, display))


def _insert_or_refetch(db: Session, entity: E, refetch: Callable[[], Optional[E]]) -> E:
    kind = type(entity).__name__.lower()
    try:
        # flushes on exit, so later lookups in this request see the new row
        with db.begin_nested():
            db.add(entity)
    except IntegrityError:
        winner = refetch()
        if winner is None:
            raise
        logger.warning(f"Concurrent insert of {kind} '{entity.name}', using existing {winner.id}")
        return winner

    logger.info(f"Created {kind} {entity.id} '{entity.name}'")
    return entity
