from flask import current_app


class SecurityHeaders:
    """Adds security headers to every response"""

    # The API only serves JSON and document downloads
    CONTENT_SECURITY_POLICY = "default-src 'none'; frame-ancestors 'none'; form-action 'none'"

    @staticmethod
    def init_app(app):
        @app.after_request
        def add_security_headers(response):
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-XSS-Protection"] = "1; mode=block"

            if not current_app.debug:
                response.headers["Strict-Transport-Security"] = (
                    "max-age=31536000; includeSubDomains"
                )

            response.headers["Content-Security-Policy"] = SecurityHeaders.CONTENT_SECURITY_POLICY
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
            response.headers.setdefault("Cache-Control", "no-store")

            return response


def init_security_headers(app):
    SecurityHeaders.init_app(app)
