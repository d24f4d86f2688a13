"""Database bootstrap tests."""

from sqlalchemy import inspect

import idea_pool.database as database_module
from idea_pool.database import init_db
from idea_pool.models.idea import Idea


def test_init_db_creates_tables(db, monkeypatch):
    """Test init_db registers every model and creates its table."""
    engine = db.get_bind()
    monkeypatch.setattr(database_module, "engine", engine)
    init_db()
    assert {"users", "ideas"} <= set(inspect(engine).get_table_names())


def test_idea_has_no_user_relationship():
    """Test ideas reference their owner by id only."""
    assert "user" not in inspect(Idea).relationships
