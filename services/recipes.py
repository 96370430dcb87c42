from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import joinedload, selectinload

from errors import NotRecipeOwner, PrivateRecipe, RecipeNotFound
from models import db, MAX_INT, Rating, Recipe
from schemas import RecipeUpdate
from services.ratings import annotate, check_rating_value, upsert_rating


def _like_pattern(term):
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class RecipeFilter:
    """Which recipes a listing may return.

    ``public()`` is the open feed, optionally narrowed by a search term;
    ``owned_by()`` is an author's own shelf, private recipes included.
    """
    public_only: bool = False
    search: Optional[str] = None
    author_id: Optional[int] = None

    @classmethod
    def public(cls, search=None):
        search = search.strip() if search else None
        return cls(public_only=True, search=search or None)

    @classmethod
    def owned_by(cls, user_id):
        return cls(author_id=user_id)

    def apply(self, query):
        if self.public_only:
            query = query.filter(Recipe.is_public.is_(True))
        if self.author_id is not None:
            query = query.filter(Recipe.author_id == self.author_id)
        if self.search:
            pattern = _like_pattern(self.search)
            query = query.filter(
                or_(
                    Recipe.title.ilike(pattern, escape="\\"),
                    Recipe.description.ilike(pattern, escape="\\"),
                    Recipe.cuisine.ilike(pattern, escape="\\"),
                )
            )
        return query


def _get_recipe(recipe_id, options=None):
    # Ids past the INTEGER range cannot exist and would overflow the bind
    if not 0 < recipe_id <= MAX_INT:
        raise RecipeNotFound()
    recipe = db.session.get(Recipe, recipe_id, options=options)
    if recipe is None:
        raise RecipeNotFound()
    return recipe


def load_recipe_for(recipe_id, user_id, action):
    """Fetch a recipe and check ``user_id`` may perform ``action`` on it.

    ``update`` and ``delete`` need the author; ``rate`` needs the recipe to be
    public or the caller to be its author.
    """
    recipe = _get_recipe(recipe_id)

    if action == "rate":
        if not recipe.is_public and recipe.author_id != user_id:
            current_app.logger.warning("User %s tried to rate private recipe %s", user_id, recipe_id)
            raise PrivateRecipe()
    elif recipe.author_id != user_id:
        current_app.logger.warning("User %s tried to %s recipe %s owned by %s", user_id, action, recipe_id, recipe.author_id)
        raise NotRecipeOwner(action)
    return recipe


def _list(recipe_filter):
    query = Recipe.query.options(joinedload(Recipe.author), selectinload(Recipe.ratings))
    query = recipe_filter.apply(query)
    recipes = query.order_by(Recipe.created_at.desc(), Recipe.id.desc()).all()

    return [
        annotate(
            {**recipe.to_dict(), "author": recipe.author.to_summary()},
            [r.rating for r in recipe.ratings],
        )
        for recipe in recipes
    ]


## READS ##

def list_public(query=None):
    return _list(RecipeFilter.public(query))


def list_owned_by(user_id):
    return _list(RecipeFilter.owned_by(user_id))


def get_by_id(recipe_id):
    # No visibility check: any caller holding the id can read a private recipe
    recipe = _get_recipe(recipe_id, options=[joinedload(Recipe.author)])

    ratings = (
        Rating.query.options(joinedload(Rating.user))
        .filter_by(recipe_id=recipe_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .all()
    )

    data = recipe.to_dict()
    data["author"] = recipe.author.to_summary()
    data["ratings"] = [{**r.to_dict(), "user": r.user.to_summary()} for r in ratings]
    return annotate(data, [r.rating for r in ratings])


## WRITES ##

def create(fields, author_id):
    """Store a new recipe owned by ``author_id``.

    ``fields`` is the validated payload keyed by column name. Any author
    information it carries is ignored: the author is always the caller.
    """
    fields = {k: v for k, v in fields.items() if k not in ("id", "author_id")}
    recipe = Recipe(author_id=author_id, **fields)
    db.session.add(recipe)
    db.session.commit()

    current_app.logger.info("Recipe %s created by user %s", recipe.id, author_id)
    return {**recipe.to_dict(), "author": recipe.author.to_summary(include_email=True)}


def update(recipe_id, changes, requester_id):
    """Apply a partial update from the recipe's author.

    Ownership is checked before ``changes`` is validated, so a non-author is
    refused the same way whatever they sent.
    """
    recipe = load_recipe_for(recipe_id, requester_id, "update")
    fields = RecipeUpdate.model_validate(changes).fields()

    for name, value in fields.items():
        setattr(recipe, name, value)
    db.session.commit()

    current_app.logger.info("Recipe %s updated (%s)", recipe_id, ", ".join(sorted(fields)) or "no fields")
    return {**recipe.to_dict(), "author": recipe.author.to_summary(include_email=True)}


def remove(recipe_id, requester_id):
    recipe = load_recipe_for(recipe_id, requester_id, "delete")

    db.session.delete(recipe)
    db.session.commit()

    current_app.logger.info("Recipe %s deleted by user %s", recipe_id, requester_id)
    return {"message": "Recipe deleted successfully"}


def rate(recipe_id, value, comment, rater_id):
    check_rating_value(value)
    load_recipe_for(recipe_id, rater_id, "rate")

    rating = upsert_rating(rater_id, recipe_id, value, comment)

    current_app.logger.info("User %s rated recipe %s with %s", rater_id, recipe_id, value)
    return {**rating.to_dict(), "user": rating.user.to_summary()}
