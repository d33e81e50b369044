"""Tests for the object selector query and nonce endpoints."""

import json

import pytest
from httpx import AsyncClient

from object_selector.api.v1 import dependencies
from object_selector.core.config import get_settings

QUERY_URL = "/api/v1/object-selector/query"
NONCE_FIELD = "customize_object_selector_query_nonce"


def _form(nonce: str | None, post_query_args=None, **extra) -> dict[str, str]:
    data: dict[str, str] = {}
    if nonce is not None:
        data[NONCE_FIELD] = nonce
    if post_query_args is not None:
        data["post_query_args"] = (
            post_query_args if isinstance(post_query_args, str) else json.dumps(post_query_args)
        )
    for key, value in extra.items():
        data[key] = value if isinstance(value, str) else json.dumps(value)
    return data


def _error(response) -> dict:
    body = response.json()
    assert body["success"] is False
    return body["data"]


async def test_query_requires_authentication(client: AsyncClient, nonce_for) -> None:
    response = await client.post(QUERY_URL, data=_form(nonce_for("1"), {}))
    assert response.status_code == 401
    assert response.headers.get("WWW-Authenticate") == "Bearer"


async def test_bad_nonce(client: AsyncClient, admin_headers) -> None:
    response = await client.post(QUERY_URL, data=_form("0123456789", {}), headers=admin_headers)
    assert response.status_code == 400
    assert _error(response)["code"] == "bad_nonce"


async def test_nonce_is_bound_to_caller(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(QUERY_URL, data=_form(nonce_for("2"), {}), headers=admin_headers)
    assert _error(response)["code"] == "bad_nonce"


async def test_nonce_checked_before_args(client: AsyncClient, admin_headers) -> None:
    response = await client.post(QUERY_URL, data=_form(None), headers=admin_headers)
    assert _error(response)["code"] == "bad_nonce"


async def test_missing_post_query_args(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(QUERY_URL, data=_form(nonce_for("1")), headers=admin_headers)
    assert response.status_code == 400
    assert _error(response) == {
        "code": "missing_post_query_args",
        "message": "Missing post_query_args",
        "data": None,
    }


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"post"', "null"])
async def test_invalid_post_query_args(client: AsyncClient, admin_headers, nonce_for, raw) -> None:
    response = await client.post(QUERY_URL, data=_form(nonce_for("1"), raw), headers=admin_headers)
    assert response.status_code == 400
    assert _error(response)["code"] == "invalid_post_query_args"


async def test_flat_query_defaults(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(QUERY_URL, data=_form(nonce_for("1"), {}), headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    results = body["data"]["results"]
    assert [r["id"] for r in results] == [2, 1, 11]
    assert body["data"]["pagination"] == {"more": False}
    hello = results[1]
    assert hello["text"] == "Hello & Welcome"
    assert hello["title"] == "Hello & Welcome"
    assert hello["post_title"] == "Hello & Welcome"
    assert hello["post_type"] == "post"
    assert hello["post_status"] == "publish"
    assert hello["post_date_gmt"] == "2026-01-10 12:00:00"
    assert hello["post_author"] == 1
    assert hello["featured_image"] is None


async def test_flat_query_pagination_more(
    client: AsyncClient, admin_headers, nonce_for, monkeypatch
) -> None:
    settings = get_settings().model_copy(update={"default_posts_per_page": 2})
    monkeypatch.setattr(dependencies, "get_settings", lambda: settings)

    first = await client.post(QUERY_URL, data=_form(nonce_for("1"), {}), headers=admin_headers)
    assert [r["id"] for r in first.json()["data"]["results"]] == [2, 1]
    assert first.json()["data"]["pagination"]["more"] is True

    second = await client.post(
        QUERY_URL, data=_form(nonce_for("1"), {"paged": 2}), headers=admin_headers
    )
    assert [r["id"] for r in second.json()["data"]["results"]] == [11]
    assert second.json()["data"]["pagination"]["more"] is False


async def test_flat_query_multiple_types_and_statuses(
    client: AsyncClient, admin_headers, nonce_for
) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(
            nonce_for("1"),
            {"s": "idea", "post_type": ["post", "page"], "post_status": ["publish", "draft"]},
        ),
        headers=admin_headers,
    )
    results = response.json()["data"]["results"]
    assert [r["text"] for r in results] == ["[Draft] Draft idea (Post)"]


async def test_disallowed_query_var(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"s": "x", "posts_per_page": 100}),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert _error(response)["code"] == "disallowed_query_var"
    assert _error(response)["data"] == {"query_vars": ["posts_per_page"]}


async def test_unknown_orderby_is_rejected(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"orderby": "bogus"}),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert _error(response)["code"] == "invalid_orderby"


async def test_subscriber_cannot_query_private_posts(
    client: AsyncClient, auth_headers_for, nonce_for
) -> None:
    headers = auth_headers_for("7", "subscriber")
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("7"), {"post_status": "private"}),
        headers=headers,
    )
    assert response.status_code == 400
    assert _error(response) == {
        "code": "cannot_query_private_posts",
        "message": "Cannot query private posts",
        "data": {"post_type": "post"},
    }

    allowed = await client.post(QUERY_URL, data=_form(nonce_for("7"), {}), headers=headers)
    assert allowed.status_code == 200


async def test_featured_images(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"post__in": [2, 1], "include_featured_images": True}),
        headers=admin_headers,
    )
    assert response.status_code == 200
    results = {r["id"]: r for r in response.json()["data"]["results"]}
    assert results[1]["featured_image"] is None
    image = results[2]["featured_image"]
    assert image["id"] == 10
    assert image["url"] == "https://cdn.test/uploads/2026/01/sunset.jpg"
    assert image["alt"] == "Sunset over water"
    assert image["sizes"]["thumbnail"]["url"] == "https://cdn.test/uploads/2026/01/sunset-150x150.jpg"
    assert response.json()["data"]["pagination"] == {"more": False}


async def test_tree_query(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"post_type": "page", "tree_args": {"sort_column": "post_title"}}),
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert "pagination" not in data
    assert [(r["title"], r["depth"]) for r in data["results"]] == [
        ("About", 0),
        ("Team", 1),
        ("Alumni", 2),
        ("Contact", 0),
    ]


async def test_tree_query_excludes_subtree(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"post_type": "page", "tree_args": {"exclude_tree": [6]}}),
        headers=admin_headers,
    )
    assert [r["id"] for r in response.json()["data"]["results"]] == [5, 8]


async def test_tree_for_non_hierarchical_type(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"post_type": "post", "tree_args": {"sort_column": "post_title"}}),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert _error(response)["code"] == "cannot_show_tree_for_non_hierarchical_post_type"


async def test_preview_moves_page_in_tree(client: AsyncClient, admin_headers, nonce_for) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(
            nonce_for("1"),
            {"post_type": "page", "tree_args": {"sort_column": "post_title"}},
            customized={"post[page][8]": {"post_parent": "5", "post_title": "Reach us"}},
        ),
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert [(r["title"], r["depth"]) for r in response.json()["data"]["results"]] == [
        ("About", 0),
        ("Reach us", 1),
        ("Team", 1),
        ("Alumni", 2),
    ]


async def test_undecodable_customized_is_ignored(
    client: AsyncClient, admin_headers, nonce_for
) -> None:
    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {}, customized="{broken"),
        headers=admin_headers,
    )
    assert response.status_code == 200


async def test_refresh_nonces(client: AsyncClient, auth_headers_for) -> None:
    headers = auth_headers_for("5", "editor")
    response = await client.get("/api/v1/object-selector/nonces", headers=headers)
    assert response.status_code == 200
    nonce = response.json()["customize_object_selector_query"]
    assert len(nonce) == 10

    query = await client.post(QUERY_URL, data=_form(nonce, {}), headers=headers)
    assert query.status_code == 200


async def test_refresh_nonces_requires_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/v1/object-selector/nonces")
    assert response.status_code == 401


@pytest.mark.parametrize(
    "post_query_args",
    [
        '{"paged": 1e999}',
        {"paged": "inf"},
        {"paged": 99999999999999999999999},
        {"post__in": [99999999999999999999999]},
        '{"post__not_in": [1e999]}',
    ],
)
async def test_out_of_range_numbers_return_empty_page(
    client: AsyncClient, admin_headers, nonce_for, post_query_args
) -> None:
    response = await client.post(
        QUERY_URL, data=_form(nonce_for("1"), post_query_args), headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pagination"] == {"more": False}
    assert isinstance(data["results"], list)


async def test_empty_tree_args_select_flat_mode(
    client: AsyncClient, admin_headers, nonce_for, monkeypatch
) -> None:
    settings = get_settings().model_copy(update={"default_posts_per_page": 2})
    monkeypatch.setattr(dependencies, "get_settings", lambda: settings)

    response = await client.post(
        QUERY_URL,
        data=_form(nonce_for("1"), {"s": "", "tree_args": {}, "post_type": ["page"]}),
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pagination"] == {"more": True}
    assert [r["id"] for r in data["results"]] == [8, 7]
    assert all("depth" not in r for r in data["results"])
