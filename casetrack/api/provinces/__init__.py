from .routes import provinces_bp

__all__ = ["provinces_bp"]
