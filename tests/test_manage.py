from datetime import timedelta

from chooser import manage
from chooser.db import Database, utcnow
from chooser.v1 import instances


def test_init_db_and_sweep(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'chooser.db'}"

    assert manage.main(["init-db", "--db", url]) == 0

    database = Database(url)
    with database.session() as session:
        draft = instances.create(session, "simple_poll", "Old draft")
        draft.created_at = utcnow() - timedelta(hours=30)
        session.commit()
    database.dispose()

    assert manage.main(["sweep", "--db", url]) == 0
    assert "Removed 1 unpublished, 0 idle" in capsys.readouterr().out


def test_check_reports_unreachable(capsys):
    assert manage.main(["check", "--url", "http://127.0.0.1:9"]) == 1
    assert "Health check failed" in capsys.readouterr().err
