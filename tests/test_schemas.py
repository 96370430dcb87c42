import pytest
from pydantic import ValidationError

from schemas import LoginRequest, RatingCreate, RecipeCreate, RecipeUpdate, RegisterRequest

TOAST = {
    "title": "Toast",
    "ingredients": ["bread"],
    "instructions": ["toast it"],
    "prepTime": 1,
    "cookTime": 0,
    "servings": 1,
    "difficulty": "easy",
}


def test_recipe_create_maps_camel_case_to_columns():
    data = RecipeCreate.model_validate({**TOAST, "imageUrl": "http://img/toast.png"}).model_dump()
    assert data["prep_time"] == 1
    assert data["cook_time"] == 0
    assert data["image_url"] == "http://img/toast.png"
    assert data["is_public"] is True


def test_recipe_create_ignores_unknown_fields():
    data = RecipeCreate.model_validate({**TOAST, "authorId": 42}).model_dump()
    assert "author_id" not in data and "authorId" not in data


@pytest.mark.parametrize(
    "override",
    (
        {"title": "   "},
        {"ingredients": []},
        {"ingredients": ["bread", " "]},
        {"instructions": []},
        {"prepTime": -1},
        {"cookTime": -5},
        {"servings": 0},
        {"servings": 2**31},
        {"prepTime": 10**30},
        {"cookTime": True},
        {"prepTime": False},
        {"servings": 2.0},
        {"difficulty": "impossible"},
        {"isPublic": "maybe"},
    ),
)
def test_recipe_create_rejects(override):
    with pytest.raises(ValidationError):
        RecipeCreate.model_validate({**TOAST, **override})


@pytest.mark.parametrize("field", ("title", "ingredients", "instructions", "prepTime", "cookTime", "servings", "difficulty"))
def test_recipe_create_requires(field):
    payload = dict(TOAST)
    del payload[field]
    with pytest.raises(ValidationError):
        RecipeCreate.model_validate(payload)


def test_recipe_update_reports_only_sent_fields():
    assert RecipeUpdate.model_validate({"title": "Better"}).fields() == {"title": "Better"}
    assert RecipeUpdate.model_validate({}).fields() == {}


def test_recipe_update_null_clears_optional_fields():
    fields = RecipeUpdate.model_validate({"description": None, "imageUrl": None, "cuisine": ""}).fields()
    assert fields == {"description": None, "image_url": None, "cuisine": None}


@pytest.mark.parametrize("field", ("title", "ingredients", "prepTime", "servings", "difficulty", "isPublic"))
def test_recipe_update_null_on_required_field_rejected(field):
    with pytest.raises(ValidationError):
        RecipeUpdate.model_validate({field: None})


def test_recipe_update_still_validates_values():
    with pytest.raises(ValidationError):
        RecipeUpdate.model_validate({"prepTime": True})
    with pytest.raises(ValidationError):
        RecipeUpdate.model_validate({"cookTime": 10**30})
    with pytest.raises(ValidationError):
        RecipeUpdate.model_validate({"ingredients": []})
    with pytest.raises(ValidationError):
        RecipeUpdate.model_validate({"difficulty": "extreme"})


def test_rating_is_strict_integer():
    assert RatingCreate.model_validate({"rating": 3}).rating == 3
    for bad in ("3", 3.5, True):
        with pytest.raises(ValidationError):
            RatingCreate.model_validate({"rating": bad})


def test_rating_range_is_left_to_the_service():
    assert RatingCreate.model_validate({"rating": 9}).rating == 9


def test_register_normalizes_email():
    data = RegisterRequest.model_validate({"email": " Alice@Example.COM ", "name": " Alice ", "password": "Secret123!"})
    assert data.email == "alice@example.com"
    assert data.name == "Alice"


@pytest.mark.parametrize(
    "payload",
    (
        {"email": "not-an-email", "name": "Alice", "password": "Secret123!"},
        {"email": "alice@example.com", "name": "", "password": "Secret123!"},
        {"email": "alice@example.com", "name": "Alice", "password": "short1!"},
        {"email": "alice@example.com", "name": "Alice", "password": "NoDigits!!"},
        {"email": "alice@example.com", "name": "Alice", "password": "NoSpecial123"},
    ),
)
def test_register_rejects(payload):
    with pytest.raises(ValidationError):
        RegisterRequest.model_validate(payload)


def test_login_lowercases_email():
    assert LoginRequest.model_validate({"email": "BOB@example.com", "password": "x"}).email == "bob@example.com"
