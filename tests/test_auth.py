"""Auth: tokens, role gate and login against a patched user store."""

import jwt
import pytest
from fastapi import HTTPException

from auth import dependencies, repository, security

from tests.conftest import ADMIN, DOCENTE


def _user_row(**overrides):
    row = {
        "id": 1,
        "usuario": "admin1",
        "password_hash": security.hash_password("s3cret-pass"),
        "rol": "administrador",
        "is_active": True,
        "created_at": None,
    }
    row.update(overrides)
    return row


def test_access_token_carries_username_and_role():
    token = security.build_access_token(user_id=7, usuario="admin1", rol="administrador")

    payload = security.decode_access_token(token)

    assert payload["sub"] == "7"
    assert payload["usuario"] == "admin1"
    assert payload["rol"] == "administrador"


def test_non_access_token_is_rejected():
    token = jwt.encode({"sub": "1", "type": "refresh"}, security.jwt_secret(), algorithm="HS256")

    with pytest.raises(security.AuthSecurityError):
        security.decode_access_token(token)


def test_admin_roles_from_env(monkeypatch):
    monkeypatch.setenv("ADMIN_ROLES", "director, secretaria")

    assert security.admin_roles() == frozenset({"director", "secretaria"})


def test_admin_roles_default(monkeypatch):
    monkeypatch.delenv("ADMIN_ROLES", raising=False)

    assert security.admin_roles() == frozenset({"administrador", "ADMIN"})


async def test_require_admin_allows_admin():
    assert await dependencies.require_admin(dict(ADMIN)) == ADMIN


async def test_require_admin_rejects_other_roles():
    with pytest.raises(HTTPException) as excinfo:
        await dependencies.require_admin(dict(DOCENTE))

    assert excinfo.value.status_code == 403


@pytest.mark.parametrize("header", [None, "Token abc", "Bearer "])
def test_bad_authorization_header(header):
    with pytest.raises(HTTPException) as excinfo:
        dependencies._extract_bearer_token(header)

    assert excinfo.value.status_code == 401


async def test_login_then_me(anonymous_client, monkeypatch):
    row = _user_row()

    async def by_username(usuario):
        return row if usuario == "admin1" else None

    async def by_id(user_id):
        return row if user_id == 1 else None

    monkeypatch.setattr(repository, "get_user_by_username", by_username)
    monkeypatch.setattr(repository, "get_user_by_id", by_id)

    res = await anonymous_client.post("/auth/login", json={"usuario": "admin1", "password": "s3cret-pass"})
    assert res.status_code == 200
    token = res.json()["tokens"]["access_token"]

    me = await anonymous_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["usuario"] == "admin1"
    assert me.json()["rol"] == "administrador"


async def test_login_wrong_password(anonymous_client, monkeypatch):
    async def by_username(usuario):
        return _user_row()

    monkeypatch.setattr(repository, "get_user_by_username", by_username)

    res = await anonymous_client.post("/auth/login", json={"usuario": "admin1", "password": "nope"})

    assert res.status_code == 401


async def test_inactive_user_cannot_mutate(anonymous_client, monkeypatch):
    async def by_id(user_id):
        return _user_row(is_active=False)

    monkeypatch.setattr(repository, "get_user_by_id", by_id)
    token = security.build_access_token(user_id=1, usuario="admin1", rol="administrador")

    res = await anonymous_client.delete(
        "/seccion/delete/1", headers={"Authorization": f"Bearer {token}"},
    )

    assert res.status_code == 403
