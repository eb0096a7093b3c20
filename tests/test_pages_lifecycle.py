# tests/test_pages_lifecycle.py
from __future__ import annotations

import pytest
from sqlalchemy import select

from slatecms.core.errors import (
    InsufficientRole, InvalidSlugFormat, InvalidTransition, NotFound, SlugTaken, ValidationError,
)
from slatecms.models.content import Block, Page
from slatecms.schemas.content import PageMetaUpdate, TextContent
from slatecms.services import block_service, delivery_service, page_service
from slatecms.services.publish_service import can_transition

from .conftest import API


def test_slugify_and_validate():
    assert page_service.slugify("About Us!") == "about-us"
    assert page_service.slugify("  Multiple   Spaces -- here ") == "multiple-spaces-here"
    assert page_service.validate_slug("about-us") == "about-us"
    for bad in ("About", "about--us", "-about", "about_us", ""):
        with pytest.raises(InvalidSlugFormat):
            page_service.validate_slug(bad)


def test_create_page_defaults(db, admin):
    page = page_service.create_page(db, admin, title="About Us")
    assert page.slug == "about-us"
    assert page.status == "draft"
    assert page.block_order == []
    assert page.workspace_id == admin.workspace_id
    assert page.published_at is None
    assert page.seo["title"] == "About Us"


def test_duplicate_slug_in_same_workspace(db, admin):
    page_service.create_page(db, admin, title="About", slug="about-us")
    with pytest.raises(SlugTaken):
        page_service.create_page(db, admin, title="About again", slug="about-us")
    pages = db.scalars(select(Page).where(Page.slug == "about-us")).all()
    assert len(pages) == 1


def test_same_slug_allowed_in_other_workspace(db, admin, other_admin):
    a = page_service.create_page(db, admin, title="About", slug="about-us")
    b = page_service.create_page(db, other_admin, title="About", slug="about-us")
    assert a.workspace_id != b.workspace_id


def test_editor_cannot_create_page(db, editor):
    with pytest.raises(InsufficientRole):
        page_service.create_page(db, editor, title="Nope")


def test_transition_table():
    assert can_transition("draft", "publish")
    assert can_transition("archived", "publish")
    assert not can_transition("published", "publish")
    assert can_transition("published", "unpublish")
    assert not can_transition("draft", "unpublish")
    assert not can_transition("archived", "unpublish")
    for src in ("draft", "published", "archived"):
        assert can_transition(src, "archive")


def test_publish_unpublish_archive_cycle(db, admin):
    page = page_service.create_page(db, admin, title="Home")

    page = page_service.publish_page(db, admin, page.id)
    assert page.status == "published"
    assert page.published_at is not None

    with pytest.raises(InvalidTransition):
        page_service.publish_page(db, admin, page.id)

    page = page_service.unpublish_page(db, admin, page.id)
    assert page.status == "draft"
    assert page.published_at is None

    with pytest.raises(InvalidTransition):
        page_service.unpublish_page(db, admin, page.id)

    page_service.publish_page(db, admin, page.id)
    page = page_service.archive_page(db, admin, page.id)
    assert page.status == "archived"
    assert page.published_at is not None  # kept as history

    page = page_service.publish_page(db, admin, page.id)
    assert page.status == "published"


def test_invalid_transition_is_a_validation_error(db, admin):
    page = page_service.create_page(db, admin, title="Home")
    with pytest.raises(ValidationError):
        page_service.unpublish_page(db, admin, page.id)


def test_editor_cannot_publish(db, admin, editor):
    page = page_service.create_page(db, admin, title="Home")
    with pytest.raises(InsufficientRole):
        page_service.publish_page(db, editor, page.id)


def test_published_visibility_follows_status(db, admin):
    page = page_service.create_page(db, admin, title="Home", slug="home")
    ws = admin.workspace_id
    assert delivery_service.get_published_page(db, workspace_id=ws, slug="home") is None

    page_service.publish_page(db, admin, page.id)
    out = delivery_service.get_published_page(db, workspace_id=ws, slug="home")
    assert out is not None
    assert out.slug == "home"

    page_service.archive_page(db, admin, page.id)
    assert delivery_service.get_published_page(db, workspace_id=ws, slug="home") is None


def test_delete_page_removes_its_blocks(db, admin):
    page = page_service.create_page(db, admin, title="Home")
    for i in range(3):
        block_service.add_block(db, admin, page.id, content=TextContent(body=f"b{i}"))
    other = page_service.create_page(db, admin, title="Other")
    kept = block_service.add_block(db, admin, other.id, content=TextContent(body="keep"))
    page_id = page.id

    page_service.delete_page(db, admin, page_id)

    assert db.get(Page, page_id) is None
    assert db.scalars(select(Block).where(Block.page_id == page_id)).all() == []
    assert db.get(Block, kept.id) is not None


def test_update_meta_editor_fields(db, admin, editor):
    page = page_service.create_page(db, admin, title="Home", description="old")
    patch = PageMetaUpdate(title="Welcome", seo={"description": "Landing"})
    page = page_service.update_meta(db, editor, page.id, patch)

    assert page.title == "Welcome"
    assert page.description == "old"  # omitted, untouched
    assert page.seo["description"] == "Landing"
    assert page.seo["title"] == "Home"  # merged field-wise
    assert page.updated_by == editor.id


def test_update_meta_slug_is_admin_only(db, admin, editor):
    page = page_service.create_page(db, admin, title="Home")
    with pytest.raises(InsufficientRole):
        page_service.update_meta(db, editor, page.id, PageMetaUpdate(slug="start"))
    # unchanged slug in the payload is not a structural change
    page_service.update_meta(db, editor, page.id, PageMetaUpdate(slug="home", title="Home 2"))

    page = page_service.update_meta(db, admin, page.id, PageMetaUpdate(slug="start"))
    assert page.slug == "start"


def test_update_meta_slug_rules(db, admin):
    page_service.create_page(db, admin, title="Taken", slug="taken")
    page = page_service.create_page(db, admin, title="Home")
    with pytest.raises(SlugTaken):
        page_service.update_meta(db, admin, page.id, PageMetaUpdate(slug="taken"))
    with pytest.raises(InvalidSlugFormat):
        page_service.update_meta(db, admin, page.id, PageMetaUpdate(slug="Bad Slug"))


def test_cross_workspace_page_is_not_found(db, admin, other_admin):
    page = page_service.create_page(db, admin, title="Home")
    with pytest.raises(NotFound):
        page_service.publish_page(db, other_admin, page.id)
    with pytest.raises(NotFound):
        page_service.delete_page(db, other_admin, page.id)
    assert page_service.get_for_edit(db, other_admin, page.id) is None
    assert page_service.list_pages(db, other_admin) == []


def test_soft_reads_for_anonymous(db, admin):
    page = page_service.create_page(db, admin, title="Home")
    assert page_service.list_pages(db, None) == []
    assert page_service.get_for_edit(db, None, page.id) is None
    assert [p.id for p in page_service.list_pages(db, admin)] == [page.id]


def test_get_for_edit_hydrates_blocks_in_order(db, admin, editor):
    page = page_service.create_page(db, admin, title="Home")
    first = block_service.add_block(db, admin, page.id, content=TextContent(body="first"))
    second = block_service.add_block(db, admin, page.id, content=TextContent(body="second"), position=0)

    out = page_service.get_for_edit(db, editor, page.id)
    assert [b.id for b in out.blocks] == [second.id, first.id]


# -------- HTTP --------
def test_http_page_lifecycle(client, admin_login, admin_headers):
    r = client.post(f"{API}/pages", json={"title": "About Us"}, headers=admin_headers)
    assert r.status_code == 201, r.text
    page = r.json()
    assert page["slug"] == "about-us"

    r = client.post(f"{API}/pages", json={"title": "Again", "slug": "about-us"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "slug_taken"

    r = client.post(f"{API}/pages/{page['id']}/publish", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "published"

    r = client.post(f"{API}/pages/{page['id']}/unpublish", headers=admin_headers)
    assert r.json()["status"] == "draft"
    assert r.json()["published_at"] is None

    r = client.post(f"{API}/pages/{page['id']}/unpublish", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_transition"

    r = client.get(f"{API}/pages", headers=admin_headers)
    assert [p["id"] for p in r.json()] == [page["id"]]

    r = client.delete(f"{API}/pages/{page['id']}", headers=admin_headers)
    assert r.status_code == 204
    r = client.get(f"{API}/pages/{page['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() is None


def test_http_anonymous_list_is_empty(client, admin_headers):
    client.post(f"{API}/pages", json={"title": "Home"}, headers=admin_headers)
    r = client.get(f"{API}/pages")
    assert r.status_code == 200
    assert r.json() == []


def test_http_editor_gets_403_on_structural_ops(client, admin_headers, editor_headers):
    page = client.post(f"{API}/pages", json={"title": "Home"}, headers=admin_headers).json()

    r = client.post(f"{API}/pages", json={"title": "X"}, headers=editor_headers)
    assert r.status_code == 403
    assert r.json()["code"] == "insufficient_role"

    for path in ("publish", "archive"):
        assert client.post(f"{API}/pages/{page['id']}/{path}", headers=editor_headers).status_code == 403
    assert client.delete(f"{API}/pages/{page['id']}", headers=editor_headers).status_code == 403

    r = client.patch(f"{API}/pages/{page['id']}", json={"title": "Edited"}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["title"] == "Edited"


def test_http_patch_rejects_unknown_fields(client, admin_headers):
    page = client.post(f"{API}/pages", json={"title": "Home"}, headers=admin_headers).json()
    r = client.patch(f"{API}/pages/{page['id']}", json={"status": "published"}, headers=admin_headers)
    assert r.status_code == 422


def test_unique_constraint_catches_slug_race(db, admin, monkeypatch):
    # a concurrent writer slips past the pre-check; the constraint still holds
    page_service.create_page(db, admin, title="About", slug="about-us")
    monkeypatch.setattr(page_service, "_slug_in_use", lambda *a, **k: False)

    with pytest.raises(SlugTaken):
        page_service.create_page(db, admin, title="About again", slug="about-us")

    pages = db.scalars(select(Page).where(Page.workspace_id == admin.workspace_id)).all()
    assert [p.slug for p in pages] == ["about-us"]
