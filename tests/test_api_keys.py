# tests/test_api_keys.py
from __future__ import annotations

from datetime import timedelta

import pytest

from slatecms.core.errors import (
    InsufficientPermission, InsufficientRole, InvalidKey, InvalidSecret, KeyExpired, KeyRevoked, NotFound,
)
from slatecms.core.settings import settings
from slatecms.core.timeutil import utcnow
from slatecms.models.auth import ApiKey
from slatecms.services import api_key_service as keys

from .conftest import API


def test_create_returns_secret_once_and_stores_hash(db, admin):
    created = keys.create_api_key(db, admin, name="site")
    k = created.api_key
    assert k.key.startswith(settings.API_KEY_PREFIX)
    assert created.secret
    assert k.secret_hash != created.secret
    assert k.permissions == ["pages:read", "blocks:read"]
    assert k.is_active is True
    assert k.expires_at is None


def test_permission_then_revocation(db, admin):
    created = keys.create_api_key(db, admin, name="site", permissions=["pages:read"])
    key, secret = created.api_key.key, created.secret

    assert keys.validate(db, key, secret, "pages:read").id == created.api_key.id
    with pytest.raises(InsufficientPermission):
        keys.validate(db, key, secret, "blocks:write")

    keys.revoke_api_key(db, admin, created.api_key.id)
    with pytest.raises(KeyRevoked):
        keys.validate(db, key, secret, "pages:read")

    keys.reactivate_api_key(db, admin, created.api_key.id)
    assert keys.validate(db, key, secret, "pages:read")


def test_validation_order(db, admin):
    created = keys.create_api_key(db, admin, name="site")
    key = created.api_key.key

    with pytest.raises(InvalidKey):
        keys.validate(db, "cms_unknown", created.secret, "pages:read")
    with pytest.raises(InvalidKey):
        keys.validate(db, None, created.secret, "pages:read")
    with pytest.raises(InvalidSecret):
        keys.validate(db, key, "wrong-secret", "pages:read")

    # revoked wins over a wrong secret
    keys.revoke_api_key(db, admin, created.api_key.id)
    with pytest.raises(KeyRevoked):
        keys.validate(db, key, "wrong-secret", "pages:read")


def test_expired_key(db, admin):
    created = keys.create_api_key(db, admin, name="site", expires_in_days=1)
    assert created.api_key.expires_at is not None

    row = db.get(ApiKey, created.api_key.id)
    row.expires_at = utcnow() - timedelta(seconds=1)
    db.commit()

    with pytest.raises(KeyExpired):
        keys.validate(db, row.key, created.secret, "pages:read")


def test_origin_allowed():
    k = ApiKey(allowed_origins=["https://acme.io"])
    assert keys.origin_allowed(k, "https://acme.io")
    assert keys.origin_allowed(k, "https://acme.io/")
    assert not keys.origin_allowed(k, "https://evil.io")
    assert keys.origin_allowed(k, None)
    assert keys.origin_allowed(ApiKey(allowed_origins=None), "https://anything.io")


def test_editor_cannot_manage_keys(db, editor):
    with pytest.raises(InsufficientRole):
        keys.create_api_key(db, editor, name="nope")
    with pytest.raises(InsufficientRole):
        keys.list_api_keys(db, editor)


def test_keys_are_workspace_scoped(db, admin, other_admin):
    created = keys.create_api_key(db, admin, name="site")
    assert keys.list_api_keys(db, other_admin) == []
    with pytest.raises(NotFound):
        keys.revoke_api_key(db, other_admin, created.api_key.id)


def test_delete_key(db, admin):
    created = keys.create_api_key(db, admin, name="site")
    key_id = created.api_key.id
    keys.delete_api_key(db, admin, key_id)
    assert db.get(ApiKey, key_id) is None


# -------- HTTP --------
def test_http_create_and_list_never_exposes_hash(client, admin_headers):
    r = client.post(
        f"{API}/api-keys",
        json={"name": "site", "permissions": ["pages:read"], "allowed_origins": ["https://acme.io"]},
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["secret"]
    assert body["allowed_origins"] == ["https://acme.io"]

    r = client.get(f"{API}/api-keys", headers=admin_headers)
    assert r.status_code == 200
    listed = r.json()
    assert len(listed) == 1
    assert "secret" not in listed[0]
    assert "secret_hash" not in listed[0]

    r = client.post(f"{API}/api-keys/{body['id']}/revoke", headers=admin_headers)
    assert r.json()["is_active"] is False
    r = client.post(f"{API}/api-keys/{body['id']}/reactivate", headers=admin_headers)
    assert r.json()["is_active"] is True
    assert client.delete(f"{API}/api-keys/{body['id']}", headers=admin_headers).status_code == 204
