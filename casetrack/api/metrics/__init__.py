from .routes import metrics_bp

__all__ = ["metrics_bp"]
