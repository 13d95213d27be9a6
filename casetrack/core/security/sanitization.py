# casetrack/core/security/sanitization.py
from functools import wraps
from flask import request, abort, current_app
import bleach
import re
from typing import List, Optional, Callable


class RequestSanitizer:
    allowed_content_types = {
        "application/json",
        "multipart/form-data",
        "application/x-www-form-urlencoded",
        "text/plain",
    }
    # Case notes may carry light formatting
    allowed_tags = {"p", "br", "strong", "em", "u", "ul", "ol", "li"}
    rich_text_fields = {"procedural_summary", "procedural_progress", "description"}
    # Compared and hashed as sent
    verbatim_fields = {"password"}

    def __init__(self, max_content_length: int = 10 * 1024 * 1024):
        self.max_content_length = max_content_length

    @staticmethod
    def strip_control_characters(value: str) -> str:
        return "".join(char for char in value if char >= " " or char in "\n\t")

    def sanitize_string(self, value: str, field: Optional[str] = None) -> str:
        """
        Plain text only loses NULs and control characters; rich text fields
        are also cleaned down to ``allowed_tags``.
        """
        if field in self.verbatim_fields:
            return value
        value = self.strip_control_characters(value)
        if field in self.rich_text_fields:
            return bleach.clean(value, tags=self.allowed_tags, strip=True)
        return value

    def sanitize(self, obj, field: Optional[str] = None):
        if isinstance(obj, str):
            return self.sanitize_string(obj, field)
        if isinstance(obj, dict):
            return {key: self.sanitize(value, key) for key, value in obj.items()}
        if isinstance(obj, list):
            return [self.sanitize(item, field) for item in obj]
        return obj

    def validate_content_type(self, content_type: str) -> bool:
        if not content_type:
            return True
        base_content_type = content_type.split(";")[0].strip().lower()
        return base_content_type in self.allowed_content_types

    def validate_content_length(self, content_length: int) -> bool:
        if not content_length:
            return True
        return content_length <= self.max_content_length


def sanitize_request(exempt_paths: Optional[List[str]] = None):
    """Sanitize JSON and form bodies of write requests before the view sees them"""

    def decorator(f: Callable):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if exempt_paths and any(re.match(path, request.path) for path in exempt_paths):
                return f(*args, **kwargs)

            if request.method in ["POST", "PUT", "PATCH"]:
                sanitizer = RequestSanitizer(
                    current_app.config.get("MAX_CONTENT_LENGTH") or 10 * 1024 * 1024
                )

                if not sanitizer.validate_content_length(request.content_length or 0):
                    abort(413, description="Request entity too large")

                content_type = request.headers.get("Content-Type", "")
                if not sanitizer.validate_content_type(content_type):
                    abort(415, description=f"Unsupported content type: {content_type}")

                if request.is_json:
                    data = request.get_json(silent=True)
                    if data is None and request.get_data():
                        abort(400, description="Invalid JSON")
                    if data:
                        sanitized = sanitizer.sanitize(data)
                        request._cached_json = (sanitized, sanitized)

                elif request.form:
                    form = request.form.copy()
                    for key, value in request.form.items():
                        form[key] = sanitizer.sanitize_string(value, key)
                    request.form = form

            return f(*args, **kwargs)

        return decorated_function

    return decorator
