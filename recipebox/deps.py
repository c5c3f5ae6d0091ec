"""FastAPI dependencies for the recipebox API.

Provides:
- Database session dependency (re-exported from db)
- Audit actor resolution (X-User-Id header)
"""

import uuid
from typing import Optional

from fastapi import Header, HTTPException

from .db import get_db  # noqa: F401


def get_actor_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> Optional[str]:
    """Id recorded in created_by / updated_by / deleted_by.

    Authentication happens upstream; this only reads the forwarded user id.
    Absent header -> None (anonymous audit trail).
    """
    if not x_user_id:
        return None
    try:
        return str(uuid.UUID(x_user_id))
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-Id must be a UUID")
