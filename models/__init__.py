import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()

# Largest value an INTEGER column holds on PostgreSQL
MAX_INT = 2**31 - 1


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


# SQLite ignores foreign keys unless asked, and rating cascades depend on them.
# Its built-in lower() only folds ASCII, which ilike() compiles to.
@event.listens_for(Engine, "connect")
def _configure_sqlite(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Import Models ---
from .User import User
from .Recipe import Recipe
from .Rating import Rating
