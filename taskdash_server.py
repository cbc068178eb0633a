#!/usr/bin/env python3
"""
Task Dashboard Server
----------------------
JSON API for the personal task dashboard, backed by an in-memory store.
Data resets whenever the process restarts.

Usage:
    python taskdash_server.py
    python taskdash_server.py --port 8080 --no-seed
    TASKDASH_CONFIG=taskdash.yaml python taskdash_server.py

API:
    GET    /api/user            → profile (never includes the password)
    PATCH  /api/user            → partial profile update
    GET    /api/tasks           → task list; filters: ?q=&priority=&status=
    POST   /api/tasks           → create task (title, description, priority, dueDate)
    GET    /api/tasks/<id>      → one task
    PATCH  /api/tasks/<id>      → partial task update
    DELETE /api/tasks/<id>      → delete task (204)
    GET    /api/stats           → { totalTasks, completedTasks, pendingTasks, thisWeekTasks }
    GET    /api/reports         → period report; ?period=week|month|quarter
    GET    /api/calendar        → tasks placed on a month grid; ?year=&month=
    GET    /api/goals           → progress toward a target; ?type=daily|weekly|monthly&target=
    GET    /health              → liveness

Dependencies: flask, pyyaml
"""

import argparse
import logging
import sys
from datetime import datetime, timezone

from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from taskdash.calendar_view import month_view
from taskdash.config import Config
from taskdash.goals import GOAL_TYPES, goal_progress
from taskdash.reports import PERIODS, ReportError, generate_report
from taskdash.schema import Priority
from taskdash.search import STATUS_FILTERS, filter_tasks
from taskdash.store import MemStorage, Storage
from taskdash.validation import (
    ValidationError,
    validate_new_task,
    validate_task_update,
    validate_user_update,
)

logger = logging.getLogger("taskdash")

api = Blueprint("api", __name__)


def _store() -> Storage:
    return current_app.config["TASKDASH_STORE"]


def _owner_id() -> int:
    return current_app.config["TASKDASH_OWNER_ID"]


def _not_found(what: str):
    return jsonify({"message": f"{what} not found"}), 404


# ── User ─────────────────────────────────────────────────────────────────────

@api.route("/api/user", methods=["GET"])
def api_get_user():
    user = _store().get_user(_owner_id())
    if not user:
        return _not_found("User")
    return jsonify(user.to_public_dict())


@api.route("/api/user", methods=["PATCH"])
def api_update_user():
    updates = validate_user_update(request.get_json(silent=True))
    user = _store().update_user(_owner_id(), updates)
    if not user:
        return _not_found("User")
    return jsonify(user.to_public_dict())


# ── Tasks ────────────────────────────────────────────────────────────────────

@api.route("/api/tasks", methods=["GET"])
def api_list_tasks():
    query = request.args.get("q", "")
    priority = request.args.get("priority", "all").strip()
    if priority.lower() == "all":
        priority = "all"
    status = request.args.get("status", "all").strip().lower()

    errors = []
    if priority != "all":
        parsed = Priority.from_str(priority)
        if parsed is None:
            errors.append({"field": "priority",
                           "message": f"priority must be one of: all, {', '.join(Priority.values())}"})
        else:
            priority = parsed.value
    if status not in STATUS_FILTERS:
        errors.append({"field": "status",
                       "message": f"status must be one of: {', '.join(STATUS_FILTERS)}"})
    if errors:
        raise ValidationError("Invalid filter", errors)

    tasks = _store().get_tasks(_owner_id())
    tasks = filter_tasks(tasks, query=query, priority=priority, status=status)
    return jsonify([t.to_dict() for t in tasks])


@api.route("/api/tasks", methods=["POST"])
def api_create_task():
    data = validate_new_task(request.get_json(silent=True))
    task = _store().create_task(
        user_id=_owner_id(),
        title=data["title"],
        description=data["description"],
        priority=data["priority"],
        due_date=data["due_date"],
        completed=data.get("completed", False),
    )
    return jsonify(task.to_dict()), 201


@api.route("/api/tasks/<int:task_id>", methods=["GET"])
def api_get_task(task_id):
    task = _store().get_task(task_id)
    if not task:
        return _not_found("Task")
    return jsonify(task.to_dict())


@api.route("/api/tasks/<int:task_id>", methods=["PATCH"])
def api_update_task(task_id):
    updates = validate_task_update(request.get_json(silent=True))
    task = _store().update_task(task_id, updates)
    if not task:
        return _not_found("Task")
    return jsonify(task.to_dict())


@api.route("/api/tasks/<int:task_id>", methods=["DELETE"])
def api_delete_task(task_id):
    if not _store().delete_task(task_id):
        return _not_found("Task")
    return "", 204


# ── Derived views ────────────────────────────────────────────────────────────

@api.route("/api/stats")
def api_stats():
    stats = _store().get_task_stats(_owner_id())
    return jsonify(stats.to_dict())


@api.route("/api/reports")
def api_reports():
    period = request.args.get("period", "week").strip().lower()
    if period not in PERIODS:
        raise ReportError(f"period must be one of: {', '.join(PERIODS)}")
    tasks = _store().get_tasks(_owner_id())
    return jsonify(generate_report(tasks, period))


@api.route("/api/calendar")
def api_calendar():
    now = datetime.now(timezone.utc)
    try:
        year = int(request.args.get("year", now.year))
        month = int(request.args.get("month", now.month))
    except ValueError:
        raise ValidationError("Invalid data", [
            {"field": "year/month", "message": "year and month must be integers"}
        ])
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationError("Invalid data", [
            {"field": "year/month", "message": "month must be 1-12 and year 1-9999"}
        ])
    tasks = _store().get_tasks(_owner_id())
    return jsonify(month_view(tasks, year, month))


@api.route("/api/goals")
def api_goals():
    goal_type = request.args.get("type", "daily").strip().lower()
    errors = []
    if goal_type not in GOAL_TYPES:
        errors.append({"field": "type",
                       "message": f"type must be one of: {', '.join(GOAL_TYPES)}"})
    try:
        target = int(request.args.get("target", 3))
        if target < 0:
            raise ValueError(target)
    except ValueError:
        errors.append({"field": "target", "message": "target must be a non-negative integer"})
    if errors:
        raise ValidationError("Invalid data", errors)
    tasks = _store().get_tasks(_owner_id())
    return jsonify(goal_progress(tasks, goal_type, target))


@api.route("/health")
def health():
    return jsonify({"status": "ok", "storage": type(_store()).__name__})


# ── Error mapping ────────────────────────────────────────────────────────────

def _handle_validation(e: ValidationError):
    return jsonify(e.to_dict()), 400


def _handle_report(e: ReportError):
    return jsonify({"message": str(e), "errors": [{"field": "period", "message": str(e)}]}), 400


def _handle_unexpected(e: Exception):
    if isinstance(e, HTTPException):
        return jsonify({"message": e.description}), e.code
    logger.exception(f"Unhandled error on {request.method} {request.path}")
    return jsonify({"message": "Internal server error"}), 500


# ── App factory ──────────────────────────────────────────────────────────────

def create_app(storage: Storage = None, config: Config = None) -> Flask:
    """Build the Flask app around an injected store."""
    config = config or Config()
    if storage is None:
        storage = MemStorage(seed=config.seed_data)

    app = Flask(__name__)
    app.config["TASKDASH_STORE"] = storage
    app.config["TASKDASH_OWNER_ID"] = config.owner_id
    app.json.sort_keys = False

    app.register_blueprint(api)
    app.register_error_handler(ValidationError, _handle_validation)
    app.register_error_handler(ReportError, _handle_report)
    app.register_error_handler(Exception, _handle_unexpected)
    return app


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [taskdash] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = argparse.ArgumentParser(description="Task Dashboard Server")
    parser.add_argument("--config", help="Path to taskdash.yaml (overrides TASKDASH_CONFIG)")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int)
    parser.add_argument("--no-seed", action="store_true",
                        help="Start with an empty store instead of the demo data")
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port
    if args.no_seed:
        cfg.seed_data = False

    setup_logging(cfg.log_level)

    storage = MemStorage(seed=cfg.seed_data)
    app = create_app(storage, cfg)

    print(f"""
╔═══════════════════════════════════════╗
║  Task Dashboard Server                ║
╠═══════════════════════════════════════╣
║  URL:   http://{cfg.host}:{cfg.port:<19}║
║  Owner: {cfg.owner_id:<30}║
║  Seed:  {str(cfg.seed_data):<30}║
╚═══════════════════════════════════════╝
""")

    app.run(host=cfg.host, port=cfg.port, debug=cfg.debug, threaded=True)


if __name__ == "__main__":
    main()
