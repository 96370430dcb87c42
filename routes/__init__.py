from flask import request
from flask_jwt_extended import get_jwt_identity


def current_user_id():
    # Tokens carry the id as a string subject
    return int(get_jwt_identity())


def json_body():
    return request.get_json(silent=True) or {}
