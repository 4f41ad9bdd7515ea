"""Current shopper identity as supplied by the auth layer."""
from dataclasses import dataclass
from typing import Optional, Union

GUEST = "guest"


@dataclass(frozen=True)
class Identity:
    """Authenticated WordPress user; None stands for a guest."""
    id: Union[int, str]
    email: Optional[str] = None
    display_name: Optional[str] = None


def owner_key(identity: Optional[Identity]) -> str:
    """Owner part of the wishlist storage key: the user id or "guest"."""
    if identity is None or identity.id in (None, ""):
        return GUEST
    return str(identity.id)
