# tests/test_users.py
from __future__ import annotations

import pytest

from slatecms.core.errors import CannotDeactivateSelf, EmailTaken, InsufficientRole, NotFound
from slatecms.models.auth import UserRole
from slatecms.services import user_service

from .conftest import API


def test_create_user_joins_admin_workspace(db, admin):
    u = user_service.create_user(db, admin, name="Eli", email=" Eli@Acme.io", password="pw")
    assert u.workspace_id == admin.workspace_id
    assert u.email == "eli@acme.io"
    assert u.role == UserRole.editor


def test_create_user_duplicate_email(db, admin, other_admin):
    user_service.create_user(db, admin, name="Eli", email="eli@acme.io", password="pw")
    with pytest.raises(EmailTaken):
        user_service.create_user(db, other_admin, name="Eli", email="eli@acme.io", password="pw")


def test_list_users_is_scoped(db, admin, editor, other_admin):
    ids = {u.id for u in user_service.list_users(db, admin)}
    assert ids == {admin.id, editor.id}
    assert {u.id for u in user_service.list_users(db, other_admin)} == {other_admin.id}


def test_toggle_active_rules(db, admin, editor, other_admin):
    with pytest.raises(CannotDeactivateSelf):
        user_service.toggle_user_active(db, admin, admin.id)
    with pytest.raises(NotFound):
        user_service.toggle_user_active(db, other_admin, editor.id)
    with pytest.raises(InsufficientRole):
        user_service.toggle_user_active(db, editor, admin.id)

    assert user_service.toggle_user_active(db, admin, editor.id).is_active is False
    assert user_service.toggle_user_active(db, admin, editor.id).is_active is True


def test_http_users(client, admin_headers, editor_headers):
    r = client.get(f"{API}/users", headers=admin_headers)
    assert r.status_code == 200
    users = r.json()
    assert sorted(u["role"] for u in users) == ["admin", "editor"]
    assert all("password_hash" not in u for u in users)

    assert client.get(f"{API}/users", headers=editor_headers).status_code == 403

    editor_id = next(u["id"] for u in users if u["role"] == "editor")
    r = client.post(f"{API}/users/{editor_id}/toggle-active", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is False

    # the editor's session ended with the deactivation
    r = client.get(f"{API}/auth/me", headers=editor_headers)
    assert r.json() is None
