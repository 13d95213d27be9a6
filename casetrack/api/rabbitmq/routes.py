# casetrack/api/rabbitmq/routes.py
from flask import Blueprint, jsonify, request

from casetrack.extensions import broker
from casetrack.core.utils import parse_limit

rabbitmq_bp = Blueprint("rabbitmq", __name__)


@rabbitmq_bp.route("/mensajes", methods=["GET"])
def list_messages():
    """Most recently consumed user events, newest first"""
    limit = parse_limit(request.args.get("limit"))
    messages = broker.message_log.messages(limit)
    return jsonify({"total": len(broker.message_log), "limit": limit, "mensajes": messages})


@rabbitmq_bp.route("/mensajes/stats", methods=["GET"])
def message_stats():
    """Per-event counts; keys match the /mensajes listing"""
    stats = broker.message_log.stats()
    return jsonify(
        {
            "total": stats["total"],
            "eventos": stats["events"],
            "ultimoMensaje": stats["last_message"],
        }
    )


@rabbitmq_bp.route("/mensajes", methods=["DELETE"])
def clear_messages():
    broker.message_log.clear()
    return jsonify({"message": "Message log cleared"})


@rabbitmq_bp.route("/health", methods=["GET"])
def broker_health():
    return jsonify(broker.status())
