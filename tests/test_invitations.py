import logging
from datetime import datetime, timedelta, UTC

import pytest

from app.models.category import Category
from app.models.invitation import Invitation, InvitationStatus
from app.models.meal import Meal
from app.models.role import UserRole
from app.models.tenant import Tenant
from app.models.user import User
from app.services.auth_service import AuthService


def register_payload(code: str, **overrides) -> dict:
    payload = {
        "code": code,
        "email": "owner@lacantina.mx",
        "full_name": "Ana Owner",
        "username": "anaowner",
        "password": "cantina-pass-1",
        "restaurant_name": "La Cantina",
        "slug": "la-cantina",
        "direction": "Calle 5 #10",
        "phone": "555-0142",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def invitation(client, superadmin_headers):
    response = client.post(
        "/api/admin/invitations",
        json={"email": "Owner@LaCantina.mx", "restaurant_name": "La Cantina", "notes": "Referido"},
        headers=superadmin_headers,
    )
    assert response.status_code == 201
    return response.json()


class TestCreateInvitation:
    def test_create(self, invitation, superadmin_user):
        assert len(invitation["code"]) == 8
        assert invitation["code"] == invitation["code"].upper()
        assert invitation["email"] == "owner@lacantina.mx"
        assert invitation["status"] == "pending"
        assert invitation["created_by_user_id"] == superadmin_user.id

    def test_expires_in_seven_days(self, invitation):
        expires_at = datetime.fromisoformat(invitation["expires_at"])
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        remaining = expires_at - datetime.now(UTC)
        assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)

    def test_second_pending_invitation_conflicts(self, client, superadmin_headers, invitation):
        response = client.post(
            "/api/admin/invitations",
            json={"email": "owner@lacantina.mx", "restaurant_name": "Otra"},
            headers=superadmin_headers,
        )
        assert response.status_code == 409

    def test_expired_invitation_does_not_block_a_new_one(self, client, db_session, superadmin_headers, invitation):
        row = db_session.get(Invitation, invitation["id"])
        row.expires_at = datetime.now(UTC) - timedelta(minutes=1)
        db_session.commit()

        response = client.post(
            "/api/admin/invitations",
            json={"email": "owner@lacantina.mx", "restaurant_name": "La Cantina"},
            headers=superadmin_headers,
        )
        assert response.status_code == 201

    def test_invalid_email_is_rejected(self, client, superadmin_headers):
        response = client.post(
            "/api/admin/invitations",
            json={"email": "not-an-email", "restaurant_name": "X"},
            headers=superadmin_headers,
        )
        assert response.status_code == 400

    def test_list_and_delete(self, client, superadmin_headers, invitation):
        listed = client.get("/api/admin/invitations", headers=superadmin_headers).json()
        assert listed["total"] == 1

        assert client.delete(f"/api/admin/invitations/{invitation['id']}", headers=superadmin_headers).status_code == 204
        assert client.delete(f"/api/admin/invitations/{invitation['id']}", headers=superadmin_headers).status_code == 404


class TestValidateInvitation:
    def test_valid_code_case_insensitive(self, client, invitation):
        response = client.get(f"/api/invitations/validate/{invitation['code'].lower()}")

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["email"] == "owner@lacantina.mx"
        assert body["restaurant_name"] == "La Cantina"
        assert body["notes"] == "Referido"

    def test_unknown_code(self, client, db_session):
        response = client.get("/api/invitations/validate/NOPE1234")
        assert response.status_code == 404

    def test_expired_code_is_gone_and_marked(self, client, db_session, invitation):
        row = db_session.get(Invitation, invitation["id"])
        row.expires_at = datetime.now(UTC) - timedelta(seconds=1)
        db_session.commit()

        response = client.get(f"/api/invitations/validate/{invitation['code']}")

        assert response.status_code == 410
        assert response.json()["code"] == "gone"
        db_session.refresh(row)
        assert row.status == InvitationStatus.EXPIRED

        # Stays expired
        assert client.get(f"/api/invitations/validate/{invitation['code']}").status_code == 410


class TestRegister:
    def test_register_provisions_restaurant(self, client, db_session, invitation, superadmin_user):
        response = client.post("/api/invitations/register", json=register_payload(invitation["code"]))

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "la-cantina"
        assert body["redirect_to"] == f"/onboarding/welcome?restaurantId={body['tenant_id']}"

        tenant = db_session.get(Tenant, body["tenant_id"])
        assert tenant.subscription_plan.value == "standard"
        assert tenant.subscription_status.value == "active"

        user = db_session.get(User, body["user_id"])
        assert user.role == UserRole.ADMIN
        assert user.tenant_id == tenant.id

        categories = db_session.query(Category).filter(Category.tenant_id == tenant.id).order_by(Category.sort_order).all()
        assert [c.name for c in categories] == ["Entradas", "Platos Principales", "Bebidas", "Postres"]
        meals = db_session.query(Meal).filter(Meal.tenant_id == tenant.id).all()
        assert len(meals) == 4
        assert all(m.is_template for m in meals)

        row = db_session.get(Invitation, invitation["id"])
        db_session.refresh(row)
        assert row.status == InvitationStatus.USED
        assert row.used_by_user_id == user.id

        identity, _ = AuthService(db_session).login("anaowner", "cantina-pass-1")
        assert identity.tenant_slug == "la-cantina"

    def test_invitation_is_single_use(self, client, invitation):
        first = client.post("/api/invitations/register", json=register_payload(invitation["code"]))
        assert first.status_code == 201

        second = client.post(
            "/api/invitations/register",
            json=register_payload(invitation["code"], username="other", slug="otra", restaurant_name="Otra"),
        )
        assert second.status_code == 410
        assert client.get(f"/api/invitations/validate/{invitation['code']}").status_code == 410

    def test_email_must_match(self, client, invitation):
        response = client.post(
            "/api/invitations/register", json=register_payload(invitation["code"], email="someone@else.mx")
        )
        assert response.status_code == 400

    def test_taken_slug_conflicts(self, client, invitation, premium_tenant):
        response = client.post(
            "/api/invitations/register", json=register_payload(invitation["code"], slug="taco-shop")
        )
        assert response.status_code == 409

    def test_reserved_slug_is_rejected(self, client, invitation):
        response = client.post("/api/invitations/register", json=register_payload(invitation["code"], slug="www"))
        assert response.status_code == 400

    @pytest.mark.parametrize("slug", ["backoffice", "health", "api", "docs", "onboarding"])
    def test_app_route_slug_is_rejected(self, client, db_session, invitation, slug):
        response = client.post("/api/invitations/register", json=register_payload(invitation["code"], slug=slug))

        assert response.status_code == 400
        assert db_session.query(Tenant).filter(Tenant.slug == slug).first() is None

    def test_taken_username_conflicts(self, client, invitation, admin_user):
        response = client.post(
            "/api/invitations/register", json=register_payload(invitation["code"], username="tacoadmin")
        )
        assert response.status_code == 409

    def test_expired_invitation_cannot_register(self, client, db_session, invitation):
        row = db_session.get(Invitation, invitation["id"])
        row.expires_at = datetime.now(UTC) - timedelta(days=1)
        db_session.commit()

        response = client.post("/api/invitations/register", json=register_payload(invitation["code"]))
        assert response.status_code == 410
        assert db_session.query(Tenant).filter(Tenant.slug == "la-cantina").first() is None


class TestInvitationLogging:
    def test_codes_never_reach_the_log(self, client, superadmin_headers, caplog):
        caplog.set_level(logging.INFO, logger="app.services.invitation_service")

        created = client.post(
            "/api/admin/invitations",
            json={"email": "owner@lacantina.mx", "restaurant_name": "La Cantina"},
            headers=superadmin_headers,
        ).json()
        registered = client.post("/api/invitations/register", json=register_payload(created["code"]))
        assert registered.status_code == 201

        messages = [record.getMessage() for record in caplog.records]
        assert any(f"id={created['id']} created" in message for message in messages)
        assert any(f"id={created['id']} redeemed" in message for message in messages)
        assert created["code"] not in caplog.text
