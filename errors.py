"""HTTP-mapped errors raised by the service layer.

Each class extends the matching Werkzeug exception, so Flask answers with the
right status code and the JSON error handler only has to render ``description``.
"""
from werkzeug.exceptions import BadRequest, Conflict, Forbidden, NotFound, Unauthorized


class RecipeNotFound(NotFound):
    description = "Recipe not found"


class NotRecipeOwner(Forbidden):
    def __init__(self, action="modify"):
        super().__init__(f"You can only {action} your own recipes")


class PrivateRecipe(Forbidden):
    description = "Recipe is private"


class InvalidRating(BadRequest):
    description = "Rating must be an integer between 1 and 5"


class EmailAlreadyRegistered(Conflict):
    description = "User already exists"


class InvalidCredentials(Unauthorized):
    description = "Invalid credentials"
