from .routes import rabbitmq_bp

__all__ = ["rabbitmq_bp"]
