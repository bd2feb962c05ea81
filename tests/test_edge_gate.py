from app.config import settings
from app.models.subscription import SubscriptionStatus
from tests.conftest import (
    APP_HOST,
    ROOT_HOST,
    TEST_PASSWORD,
    create_tenant,
    create_test_token,
    create_user,
    hours_ago,
)

COOKIE = settings.SESSION_COOKIE_NAME


class TestTenantHosts:
    def test_tenant_root_is_rewritten_to_menu(self, host_client, premium_tenant):
        response = host_client("taco-shop.localhost").get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["restaurant"]["slug"] == "taco-shop"
        assert body["service_suspended"] is False

    def test_production_tenant_host(self, host_client, premium_tenant):
        response = host_client("taco-shop.viw-carta.com").get("/")

        assert response.status_code == 200
        assert response.json()["restaurant"]["name"] == premium_tenant.name

    def test_forwarded_host_is_used(self, host_client, premium_tenant):
        response = host_client("10.0.0.7").get("/", headers={"X-Forwarded-Host": "taco-shop.viw-carta.com"})

        assert response.status_code == 200
        assert response.json()["restaurant"]["slug"] == "taco-shop"

    def test_unknown_tenant_slug_is_404(self, host_client, db_session):
        response = host_client("ghost.localhost").get("/")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_host_without_tenant_is_404(self, host_client):
        response = host_client("127.0.0.1").get("/")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not found", "code": "not_found"}

    def test_app_route_label_host_is_404(self, host_client, db_session):
        create_tenant(db_session, "health")

        response = host_client("health.localhost").get("/")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_api_paths_skip_the_router(self, host_client, premium_tenant):
        client = host_client("127.0.0.1")

        assert client.get("/health").status_code == 200
        assert client.get("/api/public/menu/taco-shop").status_code == 200


class TestAppHost:
    def test_privileged_page_without_session_redirects_to_login(self, host_client):
        response = host_client(APP_HOST).get("/backoffice/categories")

        assert response.status_code == 307
        assert response.headers["location"] == "/backoffice/login?callbackUrl=%2Fbackoffice%2Fcategories"

    def test_root_without_session_redirects_to_login(self, host_client):
        response = host_client(APP_HOST).get("/")

        assert response.status_code == 307
        assert response.headers["location"].startswith("/backoffice/login?callbackUrl=")

    def test_root_with_session_redirects_to_backoffice(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant))

        response = client.get("/")

        assert response.status_code == 307
        assert response.headers["location"] == "/backoffice"

    def test_invalid_cookie_counts_as_no_session(self, host_client):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, "not-a-token")

        response = client.get("/backoffice")

        assert response.status_code == 307
        assert response.headers["location"].startswith("/backoffice/login")

    def test_login_page_is_public(self, host_client):
        response = host_client(APP_HOST).get("/backoffice/login", params={"callbackUrl": "/backoffice/orders"})

        assert response.status_code == 200
        assert response.json()["callback_url"] == "/backoffice/orders"
        assert response.json()["authenticated"] is False

    def test_backoffice_home_with_session(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant))

        response = client.get("/backoffice")

        assert response.status_code == 200
        body = response.json()
        assert body["session"]["tenant_slug"] == "taco-shop"
        assert body["features"]["create_orders"] is True
        assert body["subscription_blocked"] is False

    def test_backoffice_home_shows_locks_and_block(self, host_client, db_session):
        tenant = create_tenant(db_session, "late-payer", status=SubscriptionStatus.PAST_DUE)
        user = create_user(db_session, tenant, "latepayer")
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(user, tenant))

        body = client.get("/backoffice").json()

        assert body["features"]["create_orders"] is False
        assert body["features"]["manage_products"] is True
        assert body["subscription_blocked"] is True

    def test_login_then_backoffice(self, host_client, admin_user):
        client = host_client(APP_HOST)

        login = client.post("/api/auth/login", json={"identifier": "tacoadmin", "password": TEST_PASSWORD})
        assert login.status_code == 200
        assert COOKIE in login.cookies

        response = client.get("/backoffice")
        assert response.status_code == 200
        assert response.json()["session"]["user_id"] == admin_user.id


class TestRootHost:
    def test_marketing_page(self, host_client):
        response = host_client(ROOT_HOST).get("/")

        assert response.status_code == 200
        assert response.json()["page"] == "marketing"

    def test_www_alias(self, host_client):
        assert host_client(f"www.{ROOT_HOST}").get("/").json()["page"] == "marketing"


class TestSessionRefresh:
    def test_aging_session_gets_fresh_cookie(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant, issued_at=hours_ago(2)))

        response = client.get("/backoffice")

        assert response.status_code == 200
        assert f"{COOKIE}=" in response.headers.get("set-cookie", "")

    def test_fresh_session_is_left_alone(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant))

        response = client.get("/backoffice")

        assert response.status_code == 200
        assert "set-cookie" not in response.headers

    def test_expired_session_is_not_refreshed(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant, issued_at=hours_ago(30)))

        response = client.get("/backoffice")

        assert response.status_code == 307
        assert "set-cookie" not in response.headers

    def test_logout_clears_instead_of_refreshing(self, host_client, admin_user, premium_tenant):
        client = host_client(APP_HOST)
        client.cookies.set(COOKIE, create_test_token(admin_user, premium_tenant, issued_at=hours_ago(2)))

        response = client.post("/api/auth/logout")

        set_cookies = response.headers.get_list("set-cookie")
        assert len(set_cookies) == 1
        assert 'Max-Age=0' in set_cookies[0] or "max-age=0" in set_cookies[0].lower()
