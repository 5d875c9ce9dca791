"""Tests for token handling and role guards."""

from datetime import datetime, timedelta
import jwt as pyjwt

from waaranders.auth import jwt as auth_jwt
from waaranders.auth.jwt import create_access_token, decode_access_token, get_user_id_from_token


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestTokens:
    """Encode/decode behaviour."""

    def test_round_trip_subject_and_email(self):
        token = create_access_token("user-1", email="u@example.com")
        claims = decode_access_token(token)
        assert claims["sub"] == "user-1"
        assert claims["email"] == "u@example.com"
        assert get_user_id_from_token(token) == "user-1"

    def test_expired_token_is_rejected(self):
        payload = {"sub": "user-1", "exp": datetime.utcnow() - timedelta(minutes=1)}
        token = pyjwt.encode(payload, auth_jwt.JWT_SECRET_KEY, algorithm=auth_jwt.JWT_ALGORITHM)
        assert decode_access_token(token) is None

    def test_wrong_secret_is_rejected(self):
        token = pyjwt.encode({"sub": "user-1"}, "another-secret", algorithm="HS256")
        assert get_user_id_from_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_access_token("not-a-token") is None

    def test_hosted_auth_audience_claim_is_accepted(self):
        payload = {"sub": "user-1", "aud": "authenticated", "exp": datetime.utcnow() + timedelta(hours=1)}
        token = pyjwt.encode(payload, auth_jwt.JWT_SECRET_KEY, algorithm=auth_jwt.JWT_ALGORITHM)
        assert get_user_id_from_token(token) == "user-1"


class TestAuthenticatedRequests:
    """Endpoints reached with real bearer tokens."""

    def test_missing_token(self, anonymous_client):
        response = anonymous_client.get("/profile")
        assert response.status_code == 401

    def test_invalid_token(self, anonymous_client):
        response = anonymous_client.get("/profile", headers=_auth("garbage"))
        assert response.status_code == 401

    def test_valid_token_loads_profile(self, anonymous_client, test_volunteer_id):
        response = anonymous_client.get("/profile", headers=_auth(create_access_token(test_volunteer_id)))
        assert response.status_code == 200
        data = response.json()
        assert data["volunteer"]["id"] == test_volunteer_id
        assert data["role"] == "admin"

    def test_token_without_profile(self, anonymous_client):
        response = anonymous_client.get("/profile", headers=_auth(create_access_token("new-user")))
        assert response.status_code == 401

    def test_create_profile_from_token(self, anonymous_client):
        headers = _auth(create_access_token("new-user", email="nieuw@example.com"))

        response = anonymous_client.post(
            "/profile",
            json={"first_name": "Nina", "last_name": "Nieuw", "phone": "0499"},
            headers=headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["volunteer"]["email"] == "nieuw@example.com"
        assert data["volunteer"]["profile_completed"] is True
        # An admin already exists, so the newcomer is a plain volunteer
        assert data["role"] == "volunteer"

        again = anonymous_client.post("/profile", json={}, headers=headers)
        assert again.status_code == 409

    def test_create_profile_requires_email(self, anonymous_client):
        response = anonymous_client.post("/profile", json={}, headers=_auth(create_access_token("no-mail")))
        assert response.status_code == 400

    def test_plain_volunteer_cannot_open_management_screens(self, anonymous_client, other_volunteer_id):
        headers = _auth(create_access_token(other_volunteer_id))
        assert anonymous_client.get("/admin/todos", headers=headers).status_code == 403
        assert anonymous_client.get("/admin/roles", headers=headers).status_code == 403
        assert anonymous_client.get("/todos", headers=headers).status_code == 200

    def test_doenker_can_manage_but_not_assign_roles(self, anonymous_client, doenker_id):
        headers = _auth(create_access_token(doenker_id))
        assert anonymous_client.get("/admin/customers", headers=headers).status_code == 200
        assert anonymous_client.get("/admin/roles", headers=headers).status_code == 403
