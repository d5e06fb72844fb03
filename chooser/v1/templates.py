# read-only template catalog
import copy
from typing import Any, Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFound
from ..log import get_logger
from .schema import Template

log = get_logger("chooser.v1.templates")


def list_all(session: Session) -> List[Template]:
    return list(session.scalars(select(Template).order_by(Template.name.asc())))


def get_by_slug(session: Session, slug: str) -> Template:
    template = session.scalar(select(Template).where(Template.slug == slug))
    if template is None:
        raise NotFound(f"Template not found: {slug}")
    return template


def to_dict(template: Template) -> Dict[str, Any]:
    return {
        "slug": template.slug,
        "name": template.name,
        "description": template.description,
        "schema": template.template_data,
    }


def seed(session: Session, entries: Iterable[Dict[str, Any]]) -> int:
    """
    Insert catalog entries whose slug is not stored yet.
    Existing templates are never modified. Returns how many were added.
    """
    existing = set(session.scalars(select(Template.slug)))
    added = 0
    for entry in entries:
        if entry["slug"] in existing:
            continue
        session.add(
            Template(
                slug=entry["slug"],
                name=entry["name"],
                description=entry.get("description"),
                template_data=copy.deepcopy(entry["template_data"]),
            )
        )
        existing.add(entry["slug"])
        added += 1

    session.commit()
    if added:
        log.info("Seeded %d template(s)", added)
    return added
