from .routes import creditors_bp

__all__ = ["creditors_bp"]
