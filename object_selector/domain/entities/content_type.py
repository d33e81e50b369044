"""Content type and status entities known to the type/status registry."""

from dataclasses import dataclass, field

# Status that is shown without a "[Label] " prefix.
PUBLISH_STATUS = "publish"


@dataclass(frozen=True)
class PostTypeCapabilities:
    """Capability names a caller must hold to read a post type."""

    read: str = "read"
    read_private_posts: str = "read_private_posts"

    @classmethod
    def for_capability_type(cls, plural: str) -> "PostTypeCapabilities":
        """Build capability names from a plural capability type (e.g. 'pages')."""
        return cls(read="read", read_private_posts=f"read_private_{plural}")


@dataclass(frozen=True)
class PostType:
    """A content kind (post, page, custom type) with hierarchy and capability flags."""

    name: str
    label: str
    singular_label: str
    hierarchical: bool = False
    cap: PostTypeCapabilities = field(default_factory=PostTypeCapabilities)


@dataclass(frozen=True)
class PostStatus:
    """A post status; public statuses can be queried without read-private capability."""

    name: str
    label: str
    public: bool = False

    @property
    def is_publish(self) -> bool:
        return self.name == PUBLISH_STATUS
