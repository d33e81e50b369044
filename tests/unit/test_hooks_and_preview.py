"""SelectorHooks, PreviewState and the post settings preview callback."""

from datetime import UTC, datetime

import pytest

from object_selector.application.dtos.post import PostResult
from object_selector.application.services.hooks import PreviewState, SelectorHooks
from object_selector.core.lifespan import build_selector_hooks
from object_selector.infrastructure.services.preview import preview_post_settings


def _post(post_id: int, title: str = "Title", status: str = "publish", parent: int = 0) -> PostResult:
    return PostResult(
        id=post_id,
        post_author=1,
        post_date_gmt=datetime(2026, 1, 1, tzinfo=UTC),
        post_title=title,
        post_name=f"p{post_id}",
        post_status=status,
        post_type="page",
        post_parent=parent,
    )


def test_preview_state_applies_overrides() -> None:
    state = PreviewState()
    state.set_post_override(1, {"post_title": "Renamed", "post_parent": 5})
    updated = state.apply(_post(1))
    assert updated.post_title == "Renamed"
    assert updated.post_parent == 5
    assert state.apply(_post(2)).post_title == "Title"


def test_preview_state_rejects_unknown_fields() -> None:
    state = PreviewState()
    with pytest.raises(ValueError):
        state.set_post_override(1, {"post_content": "x"})


def test_apply_all_drops_posts_outside_queried_statuses() -> None:
    state = PreviewState()
    state.set_post_override(2, {"post_status": "draft"})
    posts = state.apply_all([_post(1), _post(2)], ["publish"])
    assert [p.id for p in posts] == [1]


def test_apply_all_without_overrides_returns_input() -> None:
    posts = [_post(1)]
    assert PreviewState().apply_all(posts, ["publish"]) is posts


def test_preview_callbacks_run_in_order() -> None:
    hooks = SelectorHooks()
    hooks.add_preview_callback(lambda state, customized: state.set_post_override(1, {"post_title": "first"}))
    hooks.add_preview_callback(lambda state, customized: state.set_post_override(1, {"post_title": "second"}))
    state = hooks.run_preview_callbacks({})
    assert state.apply(_post(1)).post_title == "second"


def test_each_run_gets_fresh_state() -> None:
    hooks = build_selector_hooks()
    first = hooks.run_preview_callbacks({"post[page][1]": {"post_title": "Edited"}})
    second = hooks.run_preview_callbacks({})
    assert first.has_overrides()
    assert not second.has_overrides()


def test_post_settings_preview_parses_setting_ids() -> None:
    state = PreviewState()
    preview_post_settings(
        state,
        {
            "post[page][5]": {"post_title": "About us", "menu_order": "3", "post_content": "ignored"},
            "post[post][7]": {"post_status": "private"},
            "blogname": "My site",
            "post[page][x]": {"post_title": "bad id"},
            "post[page][8]": "not a mapping",
        },
    )
    about = state.apply(_post(5))
    assert about.post_title == "About us"
    assert about.menu_order == 3
    assert state.apply(_post(7)).post_status == "private"
    assert state.apply(_post(8)).post_title == "Title"


def test_attachment_id_filters_chain() -> None:
    hooks = SelectorHooks()
    hooks.add_attachment_id_filter(lambda aid, post: (aid or 0) + 1)
    hooks.add_attachment_id_filter(lambda aid, post: aid * 10)
    assert hooks.filter_attachment_id(4, _post(1)) == 50
    assert SelectorHooks().filter_attachment_id(None, _post(1)) is None
