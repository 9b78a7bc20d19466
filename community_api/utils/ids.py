from uuid import uuid4


def new_id() -> str:
    """Random UUIDv4 string used as primary key for every table."""
    return str(uuid4())
