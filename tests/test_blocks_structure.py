# tests/test_blocks_structure.py
from __future__ import annotations

import pytest

from slatecms.core.errors import (
    ContentTooLong, InsufficientRole, NotFound, TypeChangeRequiresAdmin, ValidationError,
)
from slatecms.models.content import Block, Page
from slatecms.schemas.content import BlockLayout, HeroContent, ImageContent, TextContent
from slatecms.services import block_service, page_service

from .conftest import API


@pytest.fixture
def page(db, admin):
    return page_service.create_page(db, admin, title="Home")


def _order(db, page_id):
    return db.get(Page, page_id).block_order


def test_add_block_appends_or_inserts(db, admin, page):
    a = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"))
    c = block_service.add_block(db, admin, page.id, content=TextContent(body="c"), position=1)
    d = block_service.add_block(db, admin, page.id, content=TextContent(body="d"), position=99)
    assert _order(db, page.id) == [a.id, c.id, b.id, d.id]
    assert a.is_structure_locked is False
    assert a.workspace_id == admin.workspace_id


def test_editor_cannot_do_structural_ops(db, admin, editor, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    with pytest.raises(InsufficientRole):
        block_service.add_block(db, editor, page.id, content=TextContent(body="x"))
    with pytest.raises(InsufficientRole):
        block_service.update_layout(db, editor, blk.id, BlockLayout(width="full"))
    with pytest.raises(InsufficientRole):
        block_service.toggle_lock(db, editor, blk.id)
    with pytest.raises(InsufficientRole):
        block_service.delete_block(db, editor, blk.id)
    with pytest.raises(InsufficientRole):
        block_service.duplicate_block(db, editor, blk.id)
    with pytest.raises(InsufficientRole):
        page_service.reorder_blocks(db, editor, page.id, [blk.id])


def test_editor_type_change_requires_admin(db, admin, editor, page):
    blk = block_service.add_block(db, admin, page.id, content=HeroContent(heading="Hi"))
    with pytest.raises(TypeChangeRequiresAdmin):
        block_service.update_content(db, editor, blk.id, TextContent(body="now text"))
    assert db.get(Block, blk.id).content["type"] == "hero"

    blk = block_service.update_content(db, admin, blk.id, TextContent(body="now text"))
    assert blk.content["type"] == "text"
    assert blk.content["body"] == "now text"


def test_editor_can_edit_content_of_same_type(db, admin, editor, page):
    blk = block_service.add_block(db, admin, page.id, content=HeroContent(heading="Hi"))
    blk = block_service.update_content(db, editor, blk.id, HeroContent(heading="Hello", subheading="there"))
    assert blk.content == {"type": "hero", "heading": "Hello", "subheading": "there"}
    assert blk.updated_by == editor.id


def test_text_max_length(db, admin, editor, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="short", max_length=10))

    with pytest.raises(ContentTooLong):
        block_service.update_content(db, editor, blk.id, TextContent(body="x" * 11))
    with pytest.raises(ContentTooLong):
        block_service.update_content(db, admin, blk.id, TextContent(body="x" * 11))

    blk = block_service.update_content(db, editor, blk.id, TextContent(body="x" * 10))
    assert blk.content["body"] == "x" * 10
    # the limit survives an editor update that omits it
    assert blk.content["max_length"] == 10


def test_text_max_length_is_structural(db, admin, editor, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="short", max_length=10))
    with pytest.raises(InsufficientRole):
        block_service.update_content(db, editor, blk.id, TextContent(body="short", max_length=500))

    blk = block_service.update_content(db, admin, blk.id, TextContent(body="short", max_length=20))
    assert blk.content["max_length"] == 20


def test_add_block_checks_its_own_limit(db, admin, page):
    with pytest.raises(ContentTooLong):
        block_service.add_block(db, admin, page.id, content=TextContent(body="x" * 6, max_length=5))
    assert _order(db, page.id) == []


def test_toggle_lock_flips(db, admin, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    assert block_service.toggle_lock(db, admin, blk.id).is_structure_locked is True
    assert block_service.toggle_lock(db, admin, blk.id).is_structure_locked is False


def test_update_layout(db, admin, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    blk = block_service.update_layout(db, admin, blk.id, BlockLayout(width="full", padding="lg"))
    assert blk.layout == {"width": "full", "padding": "lg"}


def test_delete_block_updates_order(db, admin, page):
    a = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"))
    block_service.delete_block(db, admin, a.id)
    assert _order(db, page.id) == [b.id]
    assert db.get(Block, a.id) is None


def test_duplicate_is_placed_after_source_and_unlocked(db, admin, page):
    a = block_service.add_block(db, admin, page.id, content=ImageContent(src="/a.png", alt="A"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"))
    block_service.toggle_lock(db, admin, a.id)

    copy = block_service.duplicate_block(db, admin, a.id)
    assert _order(db, page.id) == [a.id, copy.id, b.id]
    assert copy.content == db.get(Block, a.id).content
    assert copy.is_structure_locked is False


def test_reorder_requires_permutation(db, admin, page):
    a = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"))

    page_service.reorder_blocks(db, admin, page.id, [b.id, a.id])
    assert _order(db, page.id) == [b.id, a.id]

    for bad in ([a.id], [a.id, a.id], [a.id, b.id, 9999], []):
        with pytest.raises(ValidationError):
            page_service.reorder_blocks(db, admin, page.id, bad)


def test_blocks_of_other_workspace_are_not_found(db, admin, other_admin, page):
    blk = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    with pytest.raises(NotFound):
        block_service.update_content(db, other_admin, blk.id, TextContent(body="pwn"))
    with pytest.raises(NotFound):
        block_service.add_block(db, other_admin, page.id, content=TextContent(body="x"))
    assert block_service.get_blocks_for_page(db, other_admin, page.id) == []


def test_get_blocks_for_page_in_order(db, admin, editor, page):
    a = block_service.add_block(db, admin, page.id, content=TextContent(body="a"))
    b = block_service.add_block(db, admin, page.id, content=TextContent(body="b"), position=0)
    assert [x.id for x in block_service.get_blocks_for_page(db, editor, page.id)] == [b.id, a.id]
    assert block_service.get_blocks_for_page(db, None, page.id) == []


# -------- HTTP --------
def test_http_block_flow(client, admin_headers, editor_headers):
    page = client.post(f"{API}/pages", json={"title": "Home"}, headers=admin_headers).json()

    r = client.post(
        f"{API}/pages/{page['id']}/blocks",
        json={"content": {"type": "hero", "heading": "Hi"}, "layout": {"width": "full"}},
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text
    blk = r.json()

    r = client.patch(
        f"{API}/blocks/{blk['id']}/content",
        json={"content": {"type": "text", "body": "swap"}},
        headers=editor_headers,
    )
    assert r.status_code == 400
    assert r.json()["code"] == "type_change_requires_admin"

    r = client.patch(
        f"{API}/blocks/{blk['id']}/content",
        json={"content": {"type": "hero", "heading": "Hello"}},
        headers=editor_headers,
    )
    assert r.status_code == 200
    assert r.json()["content"]["heading"] == "Hello"

    r = client.patch(f"{API}/blocks/{blk['id']}/layout", json={"layout": {"width": "narrow"}}, headers=editor_headers)
    assert r.status_code == 403

    r = client.post(f"{API}/blocks/{blk['id']}/duplicate", headers=admin_headers)
    assert r.status_code == 201
    dup = r.json()

    r = client.put(
        f"{API}/pages/{page['id']}/block-order",
        json={"block_order": [dup["id"], blk["id"]]},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["block_order"] == [dup["id"], blk["id"]]

    r = client.get(f"{API}/pages/{page['id']}/blocks", headers=editor_headers)
    assert [b["id"] for b in r.json()] == [dup["id"], blk["id"]]

    assert client.delete(f"{API}/blocks/{dup['id']}", headers=admin_headers).status_code == 204


def test_http_unknown_block_type_is_422(client, admin_headers):
    page = client.post(f"{API}/pages", json={"title": "Home"}, headers=admin_headers).json()
    r = client.post(
        f"{API}/pages/{page['id']}/blocks",
        json={"content": {"type": "video", "url": "x"}},
        headers=admin_headers,
    )
    assert r.status_code == 422
