from .routes import maestro_bp

__all__ = ["maestro_bp"]
