from .routes import activities_bp

__all__ = ["activities_bp"]
