from community_api.errors import ForbiddenError
from community_api.security import Actor


def ensure_owner_or_admin(actor: Actor, owner_id: str, what: str = "resource") -> None:
    """Members may only touch rows they own; admins may touch anything."""
    if actor.is_admin:
        return
    if actor.id != owner_id:
        raise ForbiddenError(f"You can only modify your own {what}")


def ensure_owner(actor: Actor, owner_id: str, what: str = "resource") -> None:
    if actor.id != owner_id:
        raise ForbiddenError(f"You can only modify your own {what}")
