from flask import current_app
from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy.exc import IntegrityError

from errors import EmailAlreadyRegistered, InvalidCredentials
from models import db, User


def _issue_tokens(user):
    return {
        "access_token": create_access_token(identity=str(user.id), fresh=True),
        "refresh_token": create_refresh_token(identity=str(user.id)),
        "user": user.to_summary(include_email=True),
    }


def _email_taken(email):
    return User.query.filter_by(email=email).first() is not None


def register(email, name, password):
    if _email_taken(email):
        raise EmailAlreadyRegistered()

    user = User(email=email, name=name)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        db.session.rollback()
        current_app.logger.info("Concurrent registration for %s", email)
        raise EmailAlreadyRegistered()

    current_app.logger.info("Registered user %s", user.id)
    return _issue_tokens(user)


def login(email, password):
    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        current_app.logger.info("Failed login for %s", email)
        raise InvalidCredentials()
    return _issue_tokens(user)


def refresh(user_id):
    return {"access_token": create_access_token(identity=str(user_id), fresh=False)}


def me(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise InvalidCredentials("User not found")
    return user.to_dict()
