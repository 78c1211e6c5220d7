from roster.auth.dependencies import get_current_user
from roster.auth.security import verify_token, create_access_token
from roster.auth.permissions import get_current_membership, require_role, require_admin, require_editor

__all__ = [
    "get_current_user",
    "verify_token",
    "create_access_token",
    "get_current_membership",
    "require_role",
    "require_admin",
    "require_editor",
]
