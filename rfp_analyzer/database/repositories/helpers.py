import uuid


def parse_uuid(value: str) -> uuid.UUID | None:
    """Return the UUID for a client-supplied id, or None if it is malformed."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
