import uuid


def generate_uuid():
    return str(uuid.uuid4())


def parse_limit(raw, default=50, maximum=100):
    """Parse a ?limit= query value, falling back to the default on junk"""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    if limit <= 0:
        return default
    return min(limit, maximum)
