from .routes import judicial_processes_bp

__all__ = ["judicial_processes_bp"]
