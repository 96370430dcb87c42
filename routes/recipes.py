from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from routes import current_user_id, json_body
from schemas import RatingCreate, RecipeCreate
from services import recipes as recipe_service

bp = Blueprint('recipes', __name__, url_prefix='/recipes')


## RECIPE ROUTES ##

@bp.route('', methods=['POST'])
@jwt_required()
def create_recipe():
    data = RecipeCreate.model_validate(json_body())
    recipe = recipe_service.create(data.model_dump(), current_user_id())
    return jsonify(recipe), 201


@bp.route('', methods=['GET'])
def list_recipes():
    return jsonify(recipe_service.list_public(request.args.get('q')))


@bp.route('/my-recipes', methods=['GET'])
@jwt_required()
def my_recipes():
    return jsonify(recipe_service.list_owned_by(current_user_id()))


@bp.route('/<int:recipe_id>', methods=['GET'])
def get_recipe(recipe_id):
    return jsonify(recipe_service.get_by_id(recipe_id))


@bp.route('/<int:recipe_id>', methods=['PATCH'])
@jwt_required()
def update_recipe(recipe_id):
    return jsonify(recipe_service.update(recipe_id, json_body(), current_user_id()))


@bp.route('/<int:recipe_id>', methods=['DELETE'])
@jwt_required()
def delete_recipe(recipe_id):
    return jsonify(recipe_service.remove(recipe_id, current_user_id()))


## RATINGS ROUTES ##

@bp.route('/<int:recipe_id>/rate', methods=['POST'])
@jwt_required()
def rate_recipe(recipe_id):
    data = RatingCreate.model_validate(json_body())
    rating = recipe_service.rate(recipe_id, data.rating, data.comment, current_user_id())
    return jsonify(rating), 201
