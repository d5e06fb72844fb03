from datetime import timedelta

import pytest
from sqlalchemy import select

from chooser.db import utcnow
from chooser.errors import Forbidden, InvalidArgument, NotFound
from chooser.v1 import instances, options, selections
from chooser.v1.models import OptionIn, SelectionIn
from chooser.v1.schema import Selection


def _rows(session, chooser_id):
    return session.execute(
        select(
            Selection.option_id,
            Selection.participant_name,
            Selection.selection_value,
            Selection.created_at,
            Selection.updated_at,
        ).where(Selection.chooser_id == chooser_id)
    ).all()


def test_submit_before_publish_is_forbidden_then_allowed(session):
    instance = instances.create(session, "simple_poll", "Lunch")
    options.replace_all(session, instance.id, instance.admin_id, [OptionIn(value="Pizza", order=0)])
    pizza = instances.list_options(session, instance.id)[0].id
    picks = [SelectionIn(option_id=pizza, selection_value="ok")]

    with pytest.raises(Forbidden):
        selections.submit(session, instance.id, "Alice", picks)
    assert _rows(session, instance.id) == []

    instances.publish(session, instance.id, instance.admin_id)
    assert selections.submit(session, instance.id, "Alice", picks) == 1
    assert len(_rows(session, instance.id)) == 1


def test_resubmit_overwrites_in_place(session, lunch, monkeypatch):
    instance, opts = lunch
    first = utcnow()
    later = first + timedelta(minutes=5)

    monkeypatch.setattr(selections, "utcnow", lambda: first)
    selections.submit(
        session, instance.id, "Alice", [SelectionIn(option_id=opts["Pizza"], selection_value="ok")]
    )
    monkeypatch.setattr(selections, "utcnow", lambda: later)
    selections.submit(
        session, instance.id, "Alice", [SelectionIn(option_id=opts["Pizza"], selection_value="ideal")]
    )

    rows = _rows(session, instance.id)
    assert len(rows) == 1
    assert rows[0].selection_value == "ideal"
    assert rows[0].created_at == first
    assert rows[0].updated_at == later


def test_names_are_separate_rows(session, lunch):
    instance, opts = lunch
    for name in ("Alice", "Bob"):
        selections.submit(
            session, instance.id, name, [SelectionIn(option_id=opts["Tacos"], selection_value="no")]
        )
    assert sorted(r.participant_name for r in _rows(session, instance.id)) == ["Alice", "Bob"]


def test_invalid_label_rejects_whole_batch(session, lunch):
    instance, opts = lunch
    with pytest.raises(InvalidArgument):
        selections.submit(
            session,
            instance.id,
            "Alice",
            [
                SelectionIn(option_id=opts["Pizza"], selection_value="ok"),
                SelectionIn(option_id=opts["Tacos"], selection_value="maybe"),
            ],
        )
    assert _rows(session, instance.id) == []


def test_foreign_option_rejected(session, lunch):
    instance, _ = lunch
    other = instances.create(session, "simple_poll", "Dinner")
    options.replace_all(session, other.id, other.admin_id, [OptionIn(value="Soup", order=0)])
    soup = instances.list_options(session, other.id)[0].id

    with pytest.raises(InvalidArgument):
        selections.submit(
            session, instance.id, "Alice", [SelectionIn(option_id=soup, selection_value="ok")]
        )


@pytest.mark.parametrize("item", [SelectionIn(selection_value="ok"), SelectionIn(option_id=1)])
def test_incomplete_pair_rejected(session, lunch, item):
    instance, _ = lunch
    with pytest.raises(InvalidArgument):
        selections.submit(session, instance.id, "Alice", [item])


def test_blank_participant_rejected(session, lunch):
    instance, opts = lunch
    with pytest.raises(InvalidArgument):
        selections.submit(
            session, instance.id, " ", [SelectionIn(option_id=opts["Pizza"], selection_value="ok")]
        )


def test_unknown_chooser(session):
    with pytest.raises(NotFound):
        selections.submit(session, "missing1", "Alice", [])


def test_repeated_option_in_batch_keeps_last(session, lunch):
    instance, opts = lunch
    selections.submit(
        session,
        instance.id,
        "Alice",
        [
            SelectionIn(option_id=opts["Pizza"], selection_value="no"),
            SelectionIn(option_id=opts["Pizza"], selection_value="ideal"),
        ],
    )
    rows = _rows(session, instance.id)
    assert [r.selection_value for r in rows] == ["ideal"]


def test_submit_touches_viewed_at(session, lunch):
    instance, opts = lunch
    instance.viewed_at = utcnow() - timedelta(days=30)
    session.commit()
    before = instance.viewed_at

    selections.submit(
        session, instance.id, "Alice", [SelectionIn(option_id=opts["Pizza"], selection_value="ok")]
    )

    assert instances.load(session, instance.id).viewed_at > before


def test_portable_upsert_overwrites(session, lunch, monkeypatch):
    instance, opts = lunch
    monkeypatch.setattr(selections, "_NATIVE_INSERT", {})

    for value in ("ok", "no"):
        selections.submit(
            session, instance.id, "Alice", [SelectionIn(option_id=opts["Pizza"], selection_value=value)]
        )

    assert [r.selection_value for r in _rows(session, instance.id)] == ["no"]


def test_portable_upsert_retries_as_update_after_concurrent_insert(session, lunch, monkeypatch):
    instance, opts = lunch
    monkeypatch.setattr(selections, "_NATIVE_INSERT", {})
    selections.submit(
        session,
        instance.id,
        "Alice",
        [
            SelectionIn(option_id=opts["Tacos"], selection_value="ok"),
            SelectionIn(option_id=opts["Pizza"], selection_value="ok"),
        ],
    )

    # the first lookup misses, as if another writer inserted the row right after it
    real_find = selections._find_selection
    misses = {"Pizza": 1}

    def racing_find(sess, row):
        if row["option_id"] == opts["Pizza"] and misses["Pizza"]:
            misses["Pizza"] -= 1
            return None
        return real_find(sess, row)

    monkeypatch.setattr(selections, "_find_selection", racing_find)
    selections.submit(
        session,
        instance.id,
        "Alice",
        [
            SelectionIn(option_id=opts["Tacos"], selection_value="no"),
            SelectionIn(option_id=opts["Pizza"], selection_value="ideal"),
        ],
    )

    rows = {r.option_id: r.selection_value for r in _rows(session, instance.id)}
    assert rows == {opts["Tacos"]: "no", opts["Pizza"]: "ideal"}
    assert misses["Pizza"] == 0


def test_long_participant_name_and_label(session):
    label = "x" * 150
    instance = instances.create(session, "simple_poll", "T" * 800, selection_labels=["no", label])
    options.replace_all(session, instance.id, instance.admin_id, [OptionIn(value="Pizza", order=0)])
    instances.publish(session, instance.id, instance.admin_id)
    pizza = instances.list_options(session, instance.id)[0].id
    name = "N" * 300

    selections.submit(session, instance.id, name, [SelectionIn(option_id=pizza, selection_value=label)])

    rows = _rows(session, instance.id)
    assert [(r.participant_name, r.selection_value) for r in rows] == [(name, label)]
