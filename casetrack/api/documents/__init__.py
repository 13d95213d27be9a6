from .routes import documents_bp

__all__ = ["documents_bp"]
