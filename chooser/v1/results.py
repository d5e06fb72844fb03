# per-option tallies + participant roster
from collections import defaultdict
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import instances
from .schema import Selection


def tally(labels: List[str], values: List[str]) -> Dict[str, int]:
    """
    Count values per label; every label is present, zero or not.
    """
    summary = {label: 0 for label in labels}
    for value in values:
        summary[value] = summary.get(value, 0) + 1
    return summary


def get_results(session: Session, public_id: str) -> Dict[str, Any]:
    instance = instances.load(session, public_id)
    labels = instance.selection_labels

    options = instances.list_options(session, public_id)
    rows = session.execute(
        select(Selection.option_id, Selection.participant_name, Selection.selection_value)
        .where(Selection.chooser_id == public_id)
        .order_by(Selection.participant_name.asc(), Selection.option_id.asc())
    ).all()

    by_option = defaultdict(list)
    for row in rows:
        by_option[row.option_id].append(
            {"participant_name": row.participant_name, "selection_value": row.selection_value}
        )

    options_out = []
    for option in options:
        picked = by_option.get(option.id, [])
        entry = instances.option_view(option)
        entry["summary"] = tally(labels, [s["selection_value"] for s in picked])
        entry["selections"] = picked
        options_out.append(entry)

    participants = sorted({row.participant_name for row in rows})

    instances.touch(session, instance)

    return {
        "chooser": {
            "id": instance.id,
            "title": instance.title,
            "published": instance.published,
            "selection_labels": labels,
        },
        "options": options_out,
        "participants": participants,
    }
