# participant responses, upserted per (chooser, option, participant)
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import utcnow
from ..errors import Forbidden, InvalidArgument
from ..log import get_logger
from . import instances
from .schema import Option, Selection

log = get_logger("chooser.v1.selections")

_NATIVE_INSERT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _validate(
    session: Session, chooser_id: str, labels: List[str], items: List[Any]
) -> Dict[int, str]:
    """
    Check every pair before anything is written.
    Returns option_id -> value, last one wins for repeated option ids.
    """
    owned = set(session.scalars(select(Option.id).where(Option.chooser_id == chooser_id)))
    pairs: Dict[int, str] = {}
    for item in items:
        option_id = getattr(item, "option_id", None)
        value = getattr(item, "selection_value", None)

        if option_id is None or not value:
            raise InvalidArgument(
                'Each selection must have "option_id" and "selection_value" fields'
            )
        if value not in labels:
            raise InvalidArgument(
                f'Invalid selection_value: "{value}". Allowed values: {", ".join(labels)}'
            )
        if option_id not in owned:
            raise InvalidArgument(
                f"Invalid option_id: {option_id} does not belong to this chooser"
            )
        pairs[option_id] = value
    return pairs


def _upsert_native(session: Session, insert, rows: List[Dict[str, Any]]) -> None:
    stmt = insert(Selection).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=["chooser_id", "option_id", "participant_name"],
        set_={
            "selection_value": stmt.excluded.selection_value,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    session.execute(stmt)


def _find_selection(session: Session, row: Dict[str, Any]) -> Optional[Selection]:
    return session.scalar(
        select(Selection).where(
            Selection.chooser_id == row["chooser_id"],
            Selection.option_id == row["option_id"],
            Selection.participant_name == row["participant_name"],
        )
    )


def _upsert_generic(session: Session, rows: List[Dict[str, Any]], now: datetime) -> None:
    for row in rows:
        existing = _find_selection(session, row)
        if existing is None:
            try:
                with session.begin_nested():
                    session.add(Selection(**row))
                continue
            except IntegrityError:
                # inserted concurrently, retry as update
                existing = _find_selection(session, row)
                if existing is None:
                    raise

        existing.selection_value = row["selection_value"]
        existing.updated_at = now


def submit(session: Session, public_id: str, participant_name: str, items: List[Any]) -> int:
    """
    Record one participant's answers for a published chooser.

    All-or-nothing: a single bad pair rejects the whole batch. Existing
    answers are overwritten in place, `created_at` is kept.
    """
    if not participant_name or not participant_name.strip():
        raise InvalidArgument("Missing required fields: participant_name, selections (array)")

    instance = instances.load(session, public_id)
    if not instance.published:
        raise Forbidden("Chooser is not published yet")

    pairs = _validate(session, instance.id, instance.selection_labels, items)

    now = utcnow()
    rows = [
        {
            "chooser_id": instance.id,
            "option_id": option_id,
            "participant_name": participant_name,
            "selection_value": value,
            "created_at": now,
            "updated_at": now,
        }
        for option_id, value in pairs.items()
    ]
    if rows:
        insert = _NATIVE_INSERT.get(session.get_bind().dialect.name)
        if insert is not None:
            _upsert_native(session, insert, rows)
        else:
            _upsert_generic(session, rows, now)

    instance.viewed_at = now
    session.commit()

    log.info("Recorded %d selection(s) on chooser %s", len(rows), instance.id)
    return len(items)
