class BaseAPIException(Exception):
    """Base exception class for API errors"""

    def __init__(self, message, status_code=400, payload=None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(self.message)

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["error"] = self.message
        return rv


class TenantNotFoundError(BaseAPIException):
    """Raised when no active tenant matches the request host"""

    def __init__(self, message="Tenant not found or inactive", subdomain=None, status_code=404):
        super().__init__(message, status_code, payload={"subdomain": subdomain})
        self.subdomain = subdomain


class InactiveTenantError(BaseAPIException):
    """Raised when tenant is inactive"""

    def __init__(self, message="Tenant is inactive", status_code=403):
        super().__init__(message, status_code)


class PermissionDenied(BaseAPIException):
    """Raised when user doesn't have required permissions"""

    def __init__(self, message="Permission denied", status_code=403):
        super().__init__(message, status_code)


class TenantScopeViolation(Exception):
    """Raised when a scoped read or write would cross a tenant boundary"""
