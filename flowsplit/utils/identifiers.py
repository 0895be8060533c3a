"""ID generation utilities."""

import uuid


def generate_uuid() -> str:
    """Generate a unique flow object UUID (UUID4)."""
    return str(uuid.uuid4())
