import pytest
from sqlalchemy import String

from chooser.v1.schema import Base


@pytest.mark.parametrize(
    "table", ["chooser_templates", "chooser_instances", "chooser_options", "participant_selections"]
)
def test_text_columns_are_unbounded(table):
    # user input and configurable-length tokens must never hit a VARCHAR cap
    capped = [
        column.name
        for column in Base.metadata.tables[table].columns
        if isinstance(column.type, String) and column.type.length is not None
    ]
    assert capped == []


def test_selection_natural_key_is_unique():
    constraint_columns = [
        sorted(c.name for c in constraint.columns)
        for constraint in Base.metadata.tables["participant_selections"].constraints
        if constraint.__class__.__name__ == "UniqueConstraint"
    ]
    assert ["chooser_id", "option_id", "participant_name"] in constraint_columns
