from .routes import lawyers_bp

__all__ = ["lawyers_bp"]
