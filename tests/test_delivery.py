# tests/test_delivery.py
from __future__ import annotations

import pytest

from slatecms.models.auth import ApiKey
from slatecms.schemas.content import HeroContent, PageMetaUpdate, TextContent
from slatecms.services import api_key_service, block_service, delivery_service
from slatecms.services import global_section_service as gs
from slatecms.services import page_service


@pytest.fixture
def published(db, admin):
    page = page_service.create_page(db, admin, title="Home", slug="home")
    a = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"), position=0)
    page_service.publish_page(db, admin, page.id)
    return {"page_id": page.id, "order": [b.id, a.id], "workspace_id": admin.workspace_id}


@pytest.fixture
def api_key(db, admin):
    return api_key_service.create_api_key(db, admin, name="site", permissions=["pages:read"])


def _ext(created, **extra):
    return {"X-Api-Key": created.api_key.key, "X-Api-Secret": created.secret, **extra}


def test_hydrated_page_uses_block_order(db, published):
    out = delivery_service.get_published_page(db, workspace_id=published["workspace_id"], slug="home")
    assert [b.id for b in out.blocks] == published["order"]
    assert out.header is None and out.footer is None


def test_header_default_and_override(db, admin, published):
    default = gs.create_global_section(
        db, admin, name="Main", slug="main-header", type="header",
        content=HeroContent(heading="Main"), is_default=True,
    )
    special = gs.create_global_section(
        db, admin, name="Special", slug="special-header", type="header", content=HeroContent(heading="Special"),
    )
    ws = published["workspace_id"]

    out = delivery_service.get_published_page(db, workspace_id=ws, slug="home")
    assert out.header.id == default.id

    page_service.update_meta(db, admin, published["page_id"], PageMetaUpdate(header_override_id=special.id))
    out = delivery_service.get_published_page(db, workspace_id=ws, slug="home")
    assert out.header.id == special.id

    defaults = delivery_service.get_defaults(db, workspace_id=ws)
    assert defaults.header.id == default.id
    assert defaults.footer is None


def test_pages_are_not_visible_across_workspaces(db, other_admin, published):
    assert delivery_service.get_published_page(db, workspace_id=other_admin.workspace_id, slug="home") is None
    assert delivery_service.list_published(db, workspace_id=other_admin.workspace_id) == []


def test_anonymous_and_external_reads_match(client, db, published, api_key):
    ws = published["workspace_id"]
    anon = client.get(f"/delivery/v1/workspaces/{ws}/pages/home")
    assert anon.status_code == 200
    ext = client.get("/delivery/v1/external/pages/home", headers=_ext(api_key))
    assert ext.status_code == 200
    assert anon.json() == ext.json()
    assert [b["id"] for b in ext.json()["blocks"]] == published["order"]

    assert db.get(ApiKey, api_key.api_key.id).last_used_at is not None


def test_draft_page_is_404(client, db, admin, api_key):
    page_service.create_page(db, admin, title="Draft", slug="draft")
    ws = admin.workspace_id
    r = client.get(f"/delivery/v1/workspaces/{ws}/pages/draft")
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"
    assert client.get("/delivery/v1/external/pages/draft", headers=_ext(api_key)).status_code == 404


def test_list_published(client, published, api_key):
    ws = published["workspace_id"]
    r = client.get(f"/delivery/v1/workspaces/{ws}/pages")
    assert [p["slug"] for p in r.json()] == ["home"]
    r = client.get("/delivery/v1/external/pages", headers=_ext(api_key))
    assert [p["slug"] for p in r.json()] == ["home"]


def test_external_credential_errors(client, db, admin, published, api_key):
    r = client.get("/delivery/v1/external/pages/home")
    assert r.status_code == 401
    assert r.json()["code"] == "invalid_key"

    r = client.get(
        "/delivery/v1/external/pages/home",
        headers={"X-Api-Key": api_key.api_key.key, "X-Api-Secret": "wrong"},
    )
    assert r.status_code == 401
    assert r.json()["code"] == "invalid_secret"

    api_key_service.revoke_api_key(db, admin, api_key.api_key.id)
    r = client.get("/delivery/v1/external/pages/home", headers=_ext(api_key))
    assert r.status_code == 401
    assert r.json()["code"] == "key_revoked"


def test_external_permission_required(client, db, admin, published):
    created = api_key_service.create_api_key(db, admin, name="blocks-only", permissions=["blocks:read"])
    r = client.get("/delivery/v1/external/pages", headers=_ext(created))
    assert r.status_code == 403
    assert r.json()["code"] == "insufficient_permission"


def test_external_origin_enforced(client, db, admin, published):
    created = api_key_service.create_api_key(
        db, admin, name="site", permissions=["pages:read"], allowed_origins=["https://acme.io"]
    )
    ok = client.get("/delivery/v1/external/pages/home", headers=_ext(created, Origin="https://acme.io"))
    assert ok.status_code == 200
    bad = client.get("/delivery/v1/external/pages/home", headers=_ext(created, Origin="https://evil.io"))
    assert bad.status_code == 403
    assert bad.json()["code"] == "origin_not_allowed"


def test_defaults_endpoint(client, db, admin):
    gs.create_global_section(
        db, admin, name="Foot", slug="foot", type="footer", content=TextContent(body="(c)"), is_default=True,
    )
    r = client.get(f"/delivery/v1/workspaces/{admin.workspace_id}/global-sections/defaults")
    assert r.status_code == 200
    assert r.json()["header"] is None
    assert r.json()["footer"]["slug"] == "foot"
