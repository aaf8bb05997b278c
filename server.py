import logging

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from config import Settings, load_settings
from errors import PersistenceFailure, ServiceError
from logging_setup import setup_logging
from records import id_factory
from store import JsonFileStore
from tasks import TaskService
from users import UserService

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def users_service() -> UserService:
    return current_app.extensions["users"]


def tasks_service() -> TaskService:
    return current_app.extensions["tasks"]


# Authentication
@api.post("/login")
def login():
    data = json_body()
    user = users_service().login(data.get("email"), data.get("password"))
    return jsonify({"success": True, "user": user}), 200


@api.post("/register")
def register():
    data = json_body()
    user = users_service().register(
        data.get("name"), data.get("email"), data.get("password"), data.get("role")
    )
    return jsonify({"success": True, "user": user}), 201


# Users
@api.put("/users/<user_id>")
def update_user(user_id):
    user = users_service().update_profile(user_id, json_body())
    return jsonify({"success": True, "user": user}), 200


@api.get("/users")
def list_users():
    return jsonify(users_service().list_sanitized()), 200


# Tasks
@api.get("/tasks")
def list_tasks():
    return jsonify(tasks_service().list()), 200


@api.post("/tasks")
def create_task():
    return jsonify(tasks_service().create(json_body())), 201


@api.put("/tasks/<task_id>")
def update_task(task_id):
    return jsonify(tasks_service().update(task_id, json_body())), 200


@api.delete("/tasks/<task_id>")
def delete_task(task_id):
    tasks_service().delete(task_id)
    return "", 204


@api.errorhandler(ServiceError)
def handle_service_error(e):
    return jsonify(e.to_dict()), e.status_code


@api.errorhandler(PersistenceFailure)
def handle_persistence_failure(e):
    logger.error("Storage failure: %s", e)
    return jsonify({"success": False, "message": "Storage unavailable"}), 500


def create_app(settings: Settings = None, store=None) -> Flask:
    settings = settings or load_settings()
    store = store if store is not None else JsonFileStore(settings.db_dir)
    new_id = id_factory(settings.id_strategy)

    app = Flask(__name__)
    CORS(app)
    app.config["SETTINGS"] = settings
    app.extensions["users"] = UserService(
        store,
        new_id=new_id,
        strict=settings.strict_persistence,
        hash_passwords=settings.hash_passwords,
    )
    app.extensions["tasks"] = TaskService(
        store, new_id=new_id, strict=settings.strict_persistence
    )
    app.register_blueprint(api)
    return app


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running on http://localhost:%s", settings.port)
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
