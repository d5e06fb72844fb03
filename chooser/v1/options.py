# batch replacement of an instance's options
from typing import Any, List, Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..db import utcnow
from ..errors import InvalidArgument
from ..log import get_logger
from . import instances
from .schema import Option

log = get_logger("chooser.v1.options")


def _validate(items: List[Any]) -> None:
    for item in items:
        value = getattr(item, "value", None)
        order = getattr(item, "order", None)
        if not value or order is None:
            raise InvalidArgument('Each option must have "value" and "order" fields')


def replace_all(
    session: Session,
    public_id: str,
    admin_id: Optional[str],
    items: List[Any],
) -> int:
    """
    Swap the whole option set of an instance in one transaction.

    Every item is validated before anything is deleted. Deleting an option
    cascades to the selections that reference it.
    """
    instance = instances.verify_admin(session, public_id, admin_id)
    _validate(items)

    session.execute(delete(Option).where(Option.chooser_id == instance.id))
    session.add_all(
        Option(
            chooser_id=instance.id,
            value=item.value,
            order=item.order,
            meta=getattr(item, "metadata", None),
        )
        for item in items
    )
    instance.updated_at = utcnow()
    session.commit()

    log.info("Replaced options of chooser %s (%d)", instance.id, len(items))
    return len(items)
