from flask import Blueprint, current_app, jsonify, request

from ..auth import get_session
from ..config import logger
from ..tasks import PRIORITIES, SAMPLE_TEAM, STATUSES, TaskBoard, project_summaries, sample_tasks
from . import error, json_body

bp = Blueprint("tasks", __name__)


def _board() -> TaskBoard:
    return current_app.extensions["portfolio_tasks"]


def _invalid_field(body):
    if "status" in body and body["status"] not in STATUSES:
        return "Invalid status"
    if "priority" in body and body["priority"] not in PRIORITIES:
        return "Invalid priority"
    return None


@bp.route("/tasks", methods=["GET"])
def list_tasks():
    project_id = request.args.get("projectId")
    session = get_session()
    if session is None:
        # Demo mode for visitors without an account
        return jsonify({"tasks": sample_tasks()})
    try:
        return jsonify({"tasks": _board().list(session["userId"], project_id)})
    except Exception as e:
        logger.exception(f"Error listing tasks: {e}")
        return jsonify({"tasks": sample_tasks()})


@bp.route("/tasks", methods=["POST"])
def create_task():
    session = get_session()
    if session is None:
        return error("Authentication required", 401)

    body = json_body()
    if not body.get("title"):
        return error("Title is required")
    problem = _invalid_field(body)
    if problem:
        return error(problem)

    task = _board().create(session["userId"], body)
    return jsonify({"task": task}), 201


@bp.route("/tasks", methods=["PUT"])
def update_task():
    session = get_session()
    if session is None:
        return error("Authentication required", 401)

    body = json_body()
    task_id = body.get("id")
    if not task_id:
        return error("Task ID is required")
    problem = _invalid_field(body)
    if problem:
        return error(problem)

    updates = {key: value for key, value in body.items() if key != "id"}
    task = _board().update(session["userId"], task_id, updates)
    if task is None:
        return error("Task not found", 404)
    return jsonify({"task": task})


@bp.route("/tasks", methods=["DELETE"])
def delete_task():
    session = get_session()
    if session is None:
        return error("Authentication required", 401)

    task_id = request.args.get("id")
    if not task_id:
        return error("Task ID is required")

    _board().delete(session["userId"], task_id)
    return jsonify({"success": True})


@bp.route("/tasks/projects", methods=["GET"])
def projects():
    session = get_session()
    tasks = _board().list(session["userId"]) if session else None
    return jsonify({"projects": project_summaries(tasks)})


@bp.route("/tasks/team", methods=["GET"])
def team():
    return jsonify({"team": SAMPLE_TEAM})
