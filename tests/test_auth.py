from datetime import datetime, timedelta, UTC

import pytest
from jose import jwt

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.core.security import (
    hash_password,
    needs_refresh,
    refresh_session_token,
    validate_session_token,
    verify_password,
)
from app.services.auth_service import AuthService
from tests.conftest import TEST_PASSWORD, bearer, create_test_token, create_user, hours_ago


class TestPasswordHashing:
    def test_hash_is_salted_and_verifies(self):
        first = hash_password("s3cret-value")
        second = hash_password("s3cret-value")

        assert first != second
        assert "s3cret-value" not in first
        assert verify_password("s3cret-value", first)
        assert not verify_password("wrong", first)

    def test_malformed_hash_never_verifies(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")
        assert not verify_password("anything", "")


class TestVerifyCredentials:
    def test_by_username(self, db_session, admin_user):
        verified = AuthService(db_session).verify_credentials("tacoadmin", TEST_PASSWORD)

        assert verified.user_id == admin_user.id
        assert verified.email == "tacoadmin@example.com"
        assert verified.name == admin_user.full_name

    def test_by_email_case_insensitive(self, db_session, admin_user):
        verified = AuthService(db_session).verify_credentials("TacoAdmin@Example.com", TEST_PASSWORD)
        assert verified.user_id == admin_user.id

    @pytest.mark.parametrize(
        "identifier, password",
        [
            ("tacoadmin", "wrong-password"),
            ("nobody", TEST_PASSWORD),
            ("", ""),
        ],
    )
    def test_failures_are_uniform(self, db_session, admin_user, identifier, password):
        with pytest.raises(UnauthorizedException) as exc:
            AuthService(db_session).verify_credentials(identifier, password)
        assert exc.value.message == "Invalid credentials"

    def test_inactive_user_is_rejected_like_wrong_password(self, db_session, premium_tenant):
        create_user(db_session, premium_tenant, "dormant", is_active=False)

        with pytest.raises(UnauthorizedException) as exc:
            AuthService(db_session).verify_credentials("dormant", TEST_PASSWORD)
        assert exc.value.message == "Invalid credentials"


class TestSessionTokens:
    def test_round_trip_claims(self, admin_user, premium_tenant):
        identity = validate_session_token(create_test_token(admin_user, premium_tenant))

        assert identity.user_id == admin_user.id
        assert identity.tenant_id == premium_tenant.id
        assert identity.tenant_slug == "taco-shop"
        assert identity.role == admin_user.role
        assert identity.subscription_plan == premium_tenant.subscription_plan
        assert identity.expires_at - identity.issued_at == timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)

    def test_expired_token_is_rejected(self, admin_user, premium_tenant):
        token = create_test_token(admin_user, premium_tenant, issued_at=hours_ago(25))
        with pytest.raises(UnauthorizedException):
            validate_session_token(token)

    def test_wrong_signature_is_rejected(self, admin_user, premium_tenant):
        claims = jwt.get_unverified_claims(create_test_token(admin_user, premium_tenant))
        forged = jwt.encode(claims, "another-secret", algorithm="HS256")
        with pytest.raises(UnauthorizedException):
            validate_session_token(forged)

    def test_missing_claims_are_rejected(self):
        exp = datetime.now(UTC) + timedelta(hours=1)
        no_exp = jwt.encode({"sub": "1"}, settings.SECRET_KEY, algorithm="HS256")
        no_role = jwt.encode({"sub": "1", "exp": exp}, settings.SECRET_KEY, algorithm="HS256")

        with pytest.raises(UnauthorizedException, match="expiration"):
            validate_session_token(no_exp)
        with pytest.raises(UnauthorizedException, match="malformed"):
            validate_session_token(no_role)

    def test_refresh_window(self, admin_user, premium_tenant):
        fresh = validate_session_token(create_test_token(admin_user, premium_tenant))
        aging = validate_session_token(create_test_token(admin_user, premium_tenant, issued_at=hours_ago(2)))

        assert not needs_refresh(fresh)
        assert needs_refresh(aging)

        refreshed = validate_session_token(refresh_session_token(aging))
        assert refreshed.issued_at > aging.issued_at
        assert refreshed.user_id == aging.user_id
        assert refreshed.role == aging.role


class TestAuthRoutes:
    def test_login_sets_http_only_cookie(self, client, admin_user):
        response = client.post("/api/auth/login", json={"identifier": "tacoadmin", "password": TEST_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["session"]["role"] == "admin"
        cookie_header = response.headers["set-cookie"].lower()
        assert cookie_header.startswith(f"{settings.SESSION_COOKIE_NAME}=")
        assert "httponly" in cookie_header
        assert "samesite=lax" in cookie_header

    def test_login_failure(self, client, admin_user):
        response = client.post("/api/auth/login", json={"identifier": "tacoadmin", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials", "code": "unauthorized"}
        assert "set-cookie" not in response.headers

    def test_login_validation_error(self, client):
        response = client.post("/api/auth/login", json={"identifier": ""})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_session_requires_token(self, client):
        response = client.get("/api/auth/session")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_session_with_bearer(self, client, staff_user, staff_headers):
        response = client.get("/api/auth/session", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["user_id"] == staff_user.id
        assert response.json()["role"] == "staff"

    def test_stale_cookie_falls_back_to_bearer(self, client, staff_user, staff_headers, admin_user, premium_tenant):
        client.cookies.set(settings.SESSION_COOKIE_NAME, create_test_token(admin_user, premium_tenant, hours_ago(30)))

        response = client.get("/api/auth/session", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["user_id"] == staff_user.id

    def test_valid_cookie_wins_over_bearer(self, client, staff_headers, admin_user, premium_tenant):
        client.cookies.set(settings.SESSION_COOKIE_NAME, create_test_token(admin_user, premium_tenant))

        response = client.get("/api/auth/session", headers=staff_headers)

        assert response.json()["user_id"] == admin_user.id

    def test_change_password(self, client, db_session, admin_user, admin_headers):
        response = client.post(
            "/api/backoffice/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-pass"},
            headers=admin_headers,
        )
        assert response.status_code == 200

        service = AuthService(db_session)
        assert service.verify_credentials("tacoadmin", "brand-new-pass").user_id == admin_user.id
        with pytest.raises(UnauthorizedException):
            service.verify_credentials("tacoadmin", TEST_PASSWORD)

    def test_change_password_wrong_current(self, client, admin_headers):
        response = client.post(
            "/api/backoffice/change-password",
            json={"current_password": "not-it", "new_password": "brand-new-pass"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_deactivated_user_cannot_change_password(self, client, db_session, admin_user, admin_headers):
        admin_user.is_active = False
        db_session.commit()

        response = client.post(
            "/api/backoffice/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-pass"},
            headers=admin_headers,
        )
        assert response.status_code == 401

    def test_expired_bearer_token(self, client, admin_user, premium_tenant):
        token = create_test_token(admin_user, premium_tenant, issued_at=hours_ago(48))
        assert client.get("/api/auth/session", headers=bearer(token)).status_code == 401
