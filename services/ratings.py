from datetime import datetime

from flask import current_app
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from errors import InvalidRating
from models import db, Rating

MIN_RATING = 1
MAX_RATING = 5

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def rating_summary(values):
    """Return ``(average, count)`` for a list of rating values.

    The average is the plain arithmetic mean, and 0.0 when nothing has been
    rated yet. Every read path goes through here; the result is never stored.
    """
    values = list(values)
    if not values:
        return 0.0, 0
    return sum(values) / len(values), len(values)


def annotate(recipe_dict, values):
    average, count = rating_summary(values)
    recipe_dict["averageRating"] = average
    recipe_dict["ratingCount"] = count
    return recipe_dict


def check_rating_value(value):
    if isinstance(value, bool) or not isinstance(value, int) or not (MIN_RATING <= value <= MAX_RATING):
        raise InvalidRating()


def upsert_rating(user_id, recipe_id, value, comment=None):
    """Insert or overwrite the single rating a user holds for a recipe."""
    insert = _UPSERT_INSERTS.get(db.engine.dialect.name)
    if insert is not None:
        _upsert_on_conflict(insert, user_id, recipe_id, value, comment)
    else:
        _upsert_read_then_write(user_id, recipe_id, value, comment)

    return Rating.query.filter_by(user_id=user_id, recipe_id=recipe_id).one()


def _upsert_on_conflict(insert, user_id, recipe_id, value, comment):
    now = datetime.utcnow()
    stmt = insert(Rating).values(
        user_id=user_id,
        recipe_id=recipe_id,
        rating=value,
        comment=comment,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "recipe_id"],
        set_={
            "rating": stmt.excluded.rating,
            "comment": stmt.excluded.comment,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    db.session.execute(stmt)
    db.session.commit()


def _upsert_read_then_write(user_id, recipe_id, value, comment, retry=True):
    existing = Rating.query.filter_by(user_id=user_id, recipe_id=recipe_id).first()
    if existing:
        existing.rating = value
        existing.comment = comment
    else:
        db.session.add(Rating(user_id=user_id, recipe_id=recipe_id, rating=value, comment=comment))

    try:
        db.session.commit()
    except IntegrityError:
        # Lost an insert race; the row exists now, so update it instead
        db.session.rollback()
        if not retry:
            raise
        current_app.logger.info("Rating insert raced for user %s on recipe %s, retrying", user_id, recipe_id)
        _upsert_read_then_write(user_id, recipe_id, value, comment, retry=False)
