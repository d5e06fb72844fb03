# stale-instance cleanup, triggered by cron or the optional in-process loop
import asyncio
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..config import IDLE_TTL_DAYS, UNPUBLISHED_TTL_HOURS
from ..db import Database, utcnow
from ..log import get_logger
from .schema import Instance

log = get_logger("chooser.v1.retention")

UNPUBLISHED_TTL = timedelta(hours=UNPUBLISHED_TTL_HOURS)
IDLE_TTL = timedelta(days=IDLE_TTL_DAYS)


def abandoned_drafts(now: datetime, ttl: timedelta = UNPUBLISHED_TTL):
    return (Instance.published.is_(False)) & (Instance.created_at < now - ttl)


def idle_instances(now: datetime, ttl: timedelta = IDLE_TTL):
    return Instance.viewed_at < now - ttl


def sweep(session: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Permanently delete stale instances. Options and selections go with
    them through ON DELETE CASCADE.

    Returns how many instances each rule removed.
    """
    now = now or utcnow()

    drafts = session.execute(delete(Instance).where(abandoned_drafts(now))).rowcount
    idle = session.execute(delete(Instance).where(idle_instances(now))).rowcount
    session.commit()

    counts = {"unpublished": drafts or 0, "idle": idle or 0}
    log.info(
        "Retention sweep removed %d unpublished and %d idle chooser(s)",
        counts["unpublished"],
        counts["idle"],
    )
    return counts


def run_sweep(database: Database) -> Dict[str, int]:
    with database.session() as session:
        return sweep(session)


async def retention_loop(database: Database, interval: float) -> None:
    """
    Periodically run the sweep in a worker thread.
    Failures are logged and retried on the next tick.
    """
    while True:
        try:
            await asyncio.to_thread(run_sweep, database)
        except Exception:
            log.exception("Retention sweep failed")

        await asyncio.sleep(interval)
