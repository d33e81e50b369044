"""Default role → capability map.

Mirrors the host CMS's built-in roles. Only the capabilities the selector
checks (read and read-private per post type) plus the editing capabilities
that usually travel with them are listed. ALL_CAPABILITIES grants everything,
including read-private capabilities of custom post types.
"""

from object_selector.domain.enums import UserRole

ALL_CAPABILITIES = "*"

ROLE_CAPABILITIES: dict[UserRole, frozenset[str]] = {
    UserRole.ADMINISTRATOR: frozenset({ALL_CAPABILITIES}),
    UserRole.EDITOR: frozenset(
        {
            "read",
            "read_private_posts",
            "read_private_pages",
            "edit_posts",
            "edit_pages",
            "edit_others_posts",
            "edit_others_pages",
        }
    ),
    UserRole.AUTHOR: frozenset({"read", "edit_posts", "upload_files"}),
    UserRole.CONTRIBUTOR: frozenset({"read", "edit_posts"}),
    UserRole.SUBSCRIBER: frozenset({"read"}),
}


def capabilities_for_role(role: str | None) -> frozenset[str]:
    """Return the capability set of a role name; unknown or missing roles get none."""
    if not role:
        return frozenset()
    try:
        return ROLE_CAPABILITIES[UserRole(role)]
    except ValueError:
        return frozenset()
