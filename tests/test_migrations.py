import os

import pytest
from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from flask_migrate import downgrade, upgrade
from sqlalchemy import inspect

from app import create_app
from config import TestingConfig
from models import db

MIGRATIONS = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")

# Changes that would mean the revision and the models disagree on shape
SCHEMA_OPS = ("add_table", "remove_table", "add_column", "remove_column", "add_index", "remove_index")


@pytest.fixture
def migrated_app(tmp_path):
    class FileConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'migrated.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {}

    app = create_app(FileConfig)
    with app.app_context():
        upgrade(directory=MIGRATIONS)
        yield app
        db.session.remove()
        db.engine.dispose()


def test_upgrade_creates_every_table(migrated_app):
    tables = set(inspect(db.engine).get_table_names())
    assert {"users", "recipes", "ratings", "alembic_version"} <= tables

    indexes = {ix["name"] for ix in inspect(db.engine).get_indexes("ratings")}
    assert {"ix_ratings_user_id", "ix_ratings_recipe_id"} <= indexes


def test_migrated_schema_matches_models(migrated_app):
    with db.engine.connect() as conn:
        diff = compare_metadata(MigrationContext.configure(conn), db.metadata)

    drift = [op for op in diff if isinstance(op, tuple) and op[0] in SCHEMA_OPS]
    assert drift == []


def test_api_runs_against_migrated_database(migrated_app, recipe_payload):
    client = migrated_app.test_client()
    res = client.post("/auth/register", json={"email": "alice@example.com", "name": "Alice", "password": "Secret123!"})
    assert res.status_code == 201
    headers = {"Authorization": f"Bearer {res.get_json()['access_token']}"}

    recipe = client.post("/recipes", json=recipe_payload(), headers=headers).get_json()
    assert client.post(f"/recipes/{recipe['id']}/rate", json={"rating": 4}, headers=headers).status_code == 201
    assert client.get(f"/recipes/{recipe['id']}").get_json()["averageRating"] == 4


def test_downgrade_drops_everything(migrated_app):
    downgrade(directory=MIGRATIONS, revision="base")
    assert set(inspect(db.engine).get_table_names()) <= {"alembic_version"}
