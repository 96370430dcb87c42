from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from routes import auth, recipes

migrate = Migrate()
jwt = JWTManager()


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    CORS(app,
         resources={r"/*": {
             "origins": app.config['CORS_ORIGINS'],
             "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
             "allow_headers": ["Content-Type", "Authorization"]
         }},
         supports_credentials=True
    )

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.register_blueprint(auth.bp)
    app.register_blueprint(recipes.bp)
    register_error_handlers(app)

    @app.route("/ping")
    def ping():
        return "pong", 200

    return app


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        details = [
            {"field": ".".join(str(part) for part in err["loc"]) or "body", "message": err["msg"]}
            for err in e.errors()
        ]
        return jsonify({"error": "Validation failed", "details": details}), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        db.session.rollback()
        app.logger.exception("Database Error: %s", e)
        return jsonify({"error": "An internal error occurred"}), 500


## JWT RESPONSES ##

@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({"error": reason}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({"error": reason}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "Token has expired"}), 401


app = create_app()
