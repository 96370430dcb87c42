import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

from models import MAX_INT
from models.Recipe import CLEARABLE_FIELDS

Difficulty = Literal["easy", "medium", "hard"]

EMAIL_REGEX = r'^[\w\.\+-]+@[\w\.-]+\.\w+$'
PASSWORD_REGEX = r'^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$'


class CamelModel(BaseModel):
    # Wire format is camelCase; Python code uses field names
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RecipeCreate(CamelModel):
    title: str = Field(..., max_length=200, json_schema_extra={"example": "Toast"})
    description: Optional[str] = None
    ingredients: List[str] = Field(..., json_schema_extra={"example": ["bread"]})
    instructions: List[str] = Field(..., json_schema_extra={"example": ["toast it"]})
    prep_time: StrictInt = Field(..., alias="prepTime", ge=0, le=MAX_INT)
    cook_time: StrictInt = Field(..., alias="cookTime", ge=0, le=MAX_INT)
    servings: StrictInt = Field(..., ge=1, le=MAX_INT)
    difficulty: Difficulty
    cuisine: Optional[str] = Field(None, max_length=50)
    image_url: Optional[str] = Field(None, alias="imageUrl", max_length=500)
    is_public: bool = Field(True, alias="isPublic")

    @field_validator("title")
    @classmethod
    def _check_title(cls, value):
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("ingredients", "instructions")
    @classmethod
    def _check_steps(cls, items):
        if items is None:
            return items
        if not items:
            raise ValueError("must contain at least one entry")
        if any(not item.strip() for item in items):
            raise ValueError("entries must not be blank")
        return items

    @field_validator("description", "cuisine", "image_url")
    @classmethod
    def _empty_is_absent(cls, value):
        # Forms submit "" for untouched optional inputs
        if value is not None and not value.strip():
            return None
        return value


class RecipeUpdate(RecipeCreate):
    """Partial update: omitted fields stay as they are.

    An explicit ``null`` clears a clearable field; for any other field it is
    rejected, since those columns can never be empty.
    """
    title: Optional[str] = Field(None, max_length=200)
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    prep_time: Optional[StrictInt] = Field(None, alias="prepTime", ge=0, le=MAX_INT)
    cook_time: Optional[StrictInt] = Field(None, alias="cookTime", ge=0, le=MAX_INT)
    servings: Optional[StrictInt] = Field(None, ge=1, le=MAX_INT)
    difficulty: Optional[Difficulty] = None
    is_public: Optional[bool] = Field(None, alias="isPublic")

    @model_validator(mode="after")
    def _reject_null_on_required(self):
        for name in self.model_fields_set:
            if name not in CLEARABLE_FIELDS and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def fields(self):
        return self.model_dump(exclude_unset=True)


class RatingCreate(CamelModel):
    rating: StrictInt
    comment: Optional[str] = None


class RegisterRequest(CamelModel):
    email: str
    name: str = Field(..., max_length=100)
    password: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        value = value.strip().lower()
        if not re.match(EMAIL_REGEX, value):
            raise ValueError("Invalid email format")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("password")
    @classmethod
    def _check_password(cls, value):
        if not re.match(PASSWORD_REGEX, value):
            raise ValueError(
                "Password must be at least 8 characters long, "
                "contain at least one number and one special character (@$!%*?&)."
            )
        return value


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower()
