# casetrack/api/health/routes.py

from flask import Blueprint, jsonify, current_app
from casetrack.extensions import broker, db
from redis import Redis
from sqlalchemy import text
import time


health_bp = Blueprint("health", __name__)


def check_database():
    """Check database connection"""
    try:
        db.session.execute(text("SELECT 1"))
        return True, "Healthy"
    except Exception as e:
        return False, str(e)


def check_broker():
    """Check RabbitMQ connection"""
    return broker.ping()


def check_redis():
    """Check Redis connection"""
    try:
        redis_client = Redis.from_url(current_app.config["REDIS_URL"])
        redis_client.ping()
        return True, "Healthy"
    except Exception as e:
        return False, str(e)


def _service(healthy, message):
    return {"status": "healthy" if healthy else "unhealthy", "message": message}


@health_bp.route("", methods=["GET"])
def health_check():
    """Database and broker health; Redis too when it backs the cache and limiter"""
    start_time = time.time()

    checks = {
        "database": check_database(),
        "rabbitmq": check_broker(),
    }
    if current_app.config.get("REDIS_URL"):
        checks["redis"] = check_redis()

    response_time = time.time() - start_time
    healthy = all(ok for ok, _ in checks.values())

    health_status = {
        "status": "healthy" if healthy else "unhealthy",
        "response_time": f"{response_time:.3f}s",
        "services": {name: _service(*result) for name, result in checks.items()},
        "version": current_app.config.get("VERSION", "1.0.0"),
    }

    return jsonify(health_status), 200 if healthy else 503
