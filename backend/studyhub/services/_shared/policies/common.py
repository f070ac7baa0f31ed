ADMIN_ROLE = "admin"


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the entity."""
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def can_manage(*, actor_id, actor_role, owner_id) -> bool:
    """Owners and administrators may modify an entity."""
    return actor_role == ADMIN_ROLE or is_owner(actor_id=actor_id, owner_id=owner_id)
