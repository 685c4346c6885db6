"""Authorization policy shared by every mutating operation."""
from typing import Optional
from eventquote.core.enums import UserRole
from eventquote.core.errors import AuthorizationError, NotFoundError


def is_admin(actor) -> bool:
    return actor.role == UserRole.ADMIN


def authorize(actor, owner_id: Optional[int], action: str = "modify", resource_name: str = "resource") -> None:
    """Allow admins everything and other users only what they own."""
    if is_admin(actor):
        return
    if owner_id is not None and int(owner_id) == int(actor.id):
        return
    raise AuthorizationError(f"Forbidden: you can only {action} your own {resource_name}s")


def scope_to_actor(query, model, actor):
    if is_admin(actor):
        return query
    return query.where(model.created_by == int(actor.id))


def ensure_found(item, resource_name: str = "Resource", resource_id: Optional[int] = None) -> None:
    if item:
        return
    if resource_id is not None:
        raise NotFoundError(f"{resource_name} with id {resource_id} not found")
    raise NotFoundError(f"{resource_name} not found")
