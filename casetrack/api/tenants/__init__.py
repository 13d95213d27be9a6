from .routes import tenants_bp

__all__ = ["tenants_bp"]
