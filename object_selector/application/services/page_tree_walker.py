"""Depth-first walk of a hierarchical post list.

Reproduces the host CMS's dropdown page walk with unlimited depth: parents
before children, siblings in the order the store returned them, each item
annotated with its depth.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from object_selector.application.dtos.post import PostResult
from object_selector.application.dtos.result import TreeItem


def walk_page_tree(posts: Sequence[PostResult]) -> list[TreeItem]:
    """Flatten posts into pre-order with depth (root = 0, child = parent + 1).

    Roots are posts without a parent. When no post is a root (e.g. a
    sub-tree was fetched), posts sharing the first post's parent are the
    roots. Posts whose parent is not in the list and were not reached from a
    root are orphans and are emitted afterwards at depth 0 without children.
    """
    if not posts:
        return []

    top_level: list[PostResult] = []
    children: dict[int, list[PostResult]] = defaultdict(list)
    for post in posts:
        if not post.post_parent:
            top_level.append(post)
        else:
            children[post.post_parent].append(post)

    if not top_level:
        root_parent = posts[0].post_parent
        top_level = []
        children = defaultdict(list)
        for post in posts:
            if post.post_parent == root_parent:
                top_level.append(post)
            else:
                children[post.post_parent].append(post)

    items: list[TreeItem] = []
    for post in top_level:
        _display_element(post, children, 0, items)

    # Whatever is left was never reached from a root.
    for orphans in list(children.values()):
        for orphan in orphans:
            items.append(TreeItem(post=orphan, depth=0))
    return items


def _display_element(
    post: PostResult,
    children: dict[int, list[PostResult]],
    depth: int,
    items: list[TreeItem],
) -> None:
    """Emit post, then its children recursively; consumed children are removed."""
    items.append(TreeItem(post=post, depth=depth))
    kids = children.pop(post.id, None)
    if not kids:
        return
    for child in kids:
        _display_element(child, children, depth + 1, items)
