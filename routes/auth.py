from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from routes import current_user_id, json_body
from schemas import LoginRequest, RegisterRequest
from services import auth as auth_service

bp = Blueprint('auth', __name__, url_prefix='/auth')


## AUTHENTICATION ROUTES ##

@bp.route('/register', methods=['POST'])
def register():
    data = RegisterRequest.model_validate(json_body())
    return jsonify(auth_service.register(data.email, data.name, data.password)), 201


@bp.route('/login', methods=['POST'])
def login():
    data = LoginRequest.model_validate(json_body())
    return jsonify(auth_service.login(data.email, data.password)), 200


@bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    return jsonify(auth_service.refresh(current_user_id())), 200


@bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    return jsonify(auth_service.me(current_user_id()))
