# chooser sessions: creation, lookup, admin checks, publishing
import copy
import secrets
import string
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ADMIN_TOKEN_LENGTH, DEFAULT_SELECTION_LABELS, PUBLIC_ID_LENGTH
from ..db import utcnow
from ..errors import Forbidden, Internal, InvalidArgument, NotFound
from ..log import get_logger
from . import templates
from .schema import Instance, Option

log = get_logger("chooser.v1.instances")

ID_ALPHABET = string.ascii_lowercase + string.digits
MAX_ID_ATTEMPTS = 5


def generate_id(length: int) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def participant_url(instance: Instance) -> str:
    return f"/a/v1/{instance.id}"


def admin_url(instance: Instance) -> str:
    return f"/a/v1/admin/{instance.id}/{instance.admin_id}"


def _clean_labels(labels: Optional[List[str]]) -> List[str]:
    if labels is None:
        return list(DEFAULT_SELECTION_LABELS)
    if not labels or any(not label or not label.strip() for label in labels):
        raise InvalidArgument("selection_labels must be a non-empty list of non-empty strings")
    return list(labels)


def create(
    session: Session,
    template_slug: Optional[str],
    title: Optional[str],
    description: Optional[str] = None,
    selection_labels: Optional[List[str]] = None,
) -> Instance:
    """
    Create an unpublished instance from a template.

    The template document is copied, so later catalog edits never reach
    existing instances. Public id and admin token are drawn independently.
    """
    if not template_slug or not title or not title.strip():
        raise InvalidArgument("Missing required fields: template_slug, title")

    labels = _clean_labels(selection_labels)
    template = templates.get_by_slug(session, template_slug)
    snapshot = copy.deepcopy(template.template_data)

    for _ in range(MAX_ID_ATTEMPTS):
        public_id = generate_id(PUBLIC_ID_LENGTH)
        admin_id = generate_id(ADMIN_TOKEN_LENGTH)
        if public_id == admin_id or session.get(Instance, public_id) is not None:
            continue

        now = utcnow()
        instance = Instance(
            id=public_id,
            admin_id=admin_id,
            title=title,
            description=description or None,
            template_data=snapshot,
            selection_labels=labels,
            published=False,
            created_at=now,
            updated_at=now,
            viewed_at=now,
        )
        session.add(instance)
        try:
            session.commit()
        except IntegrityError:
            # lost a race on id or admin token
            session.rollback()
            continue

        log.info("Created chooser %s from template %s", instance.id, template_slug)
        return instance

    raise Internal("Failed to allocate a unique chooser id")


def load(session: Session, public_id: str) -> Instance:
    instance = session.get(Instance, public_id)
    if instance is None:
        raise NotFound("Chooser not found")
    return instance


def list_options(session: Session, public_id: str) -> List[Option]:
    stmt = (
        select(Option)
        .where(Option.chooser_id == public_id)
        .order_by(Option.order.asc(), Option.id.asc())
    )
    return list(session.scalars(stmt))


def touch(session: Session, instance: Instance) -> None:
    """
    Record activity; `viewed_at` drives idle cleanup.
    """
    instance.viewed_at = utcnow()
    session.commit()


def get_by_id(session: Session, public_id: str) -> Tuple[Instance, List[Option]]:
    instance = load(session, public_id)
    touch(session, instance)
    return instance, list_options(session, public_id)


def verify_admin(session: Session, public_id: str, admin_id: Optional[str]) -> Instance:
    if not admin_id:
        raise InvalidArgument("Missing required field: admin_id")

    instance = load(session, public_id)
    if not secrets.compare_digest(instance.admin_id.encode(), admin_id.encode()):
        raise Forbidden("Invalid admin_id")
    return instance


def publish(session: Session, public_id: str, admin_id: Optional[str]) -> bool:
    """
    Publish an instance. Returns False when it was already published.
    """
    instance = verify_admin(session, public_id, admin_id)
    if instance.published:
        return False

    instance.published = True
    instance.updated_at = utcnow()
    session.commit()
    log.info("Published chooser %s", instance.id)
    return True


def option_view(option: Option) -> Dict[str, Any]:
    return {
        "id": option.id,
        "value": option.value,
        "order": option.order,
        "metadata": option.meta,
    }


def public_view(instance: Instance, options: List[Option]) -> Dict[str, Any]:
    """
    Participant-facing representation; never includes the admin token.
    """
    return {
        "id": instance.id,
        "title": instance.title,
        "description": instance.description,
        "template_data": instance.template_data,
        "selection_labels": instance.selection_labels,
        "published": instance.published,
        "created_at": instance.created_at.isoformat(),
        "options": [option_view(o) for o in options],
    }
