"""
Audit trail for role and user-role changes
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog


def _json_safe(value: Any) -> Any:
    """Make a snapshot storable in a JSON column"""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return _json_safe(value.model_dump())
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    return str(value)


def log_audit(
    db: Session,
    actor_id: Optional[int],
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    old_values: Optional[Dict[str, Any]] = None,
    new_values: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Add an audit entry to the caller's transaction

    The entry is flushed, not committed: it is persisted or rolled back
    together with the change it records.

    Args:
        db: Database session
        actor_id: User performing the change (None for seed / system jobs)
        action: e.g. "role_created", "permissions_synced", "user_role_added"
        entity_type: "role", "user" or "staff_member"
        entity_id: ID of the changed row
        old_values: Snapshot before the change
        new_values: Snapshot after the change
    """
    entry = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        old_values=_json_safe(old_values),
        new_values=_json_safe(new_values),
        created_at=datetime.now(timezone.utc),
    )
    db.add(entry)
    db.flush()
    return entry


def list_entries(db: Session, entity_type: str, entity_id: int) -> List[AuditLog]:
    """Audit trail of one entity, oldest first"""
    return (
        db.query(AuditLog)
        .filter(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
        .order_by(AuditLog.created_at.asc(), AuditLog.id.asc())
        .all()
    )
