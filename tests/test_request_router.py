import pytest

from app.routing.host_resolver import HostClassification
from app.routing.request_router import (
    RouteAction,
    RouteDecision,
    RouterConfig,
    decide_route,
    tenant_path,
)

CONFIG = RouterConfig()
ROOT = HostClassification.root()
APP = HostClassification.app()
TACO = HostClassification.tenant("taco-shop")
NO_TENANT = HostClassification.tenant("")


class TestRootHost:
    @pytest.mark.parametrize("path", ["/", "/pricing", "/backoffice"])
    @pytest.mark.parametrize("has_session", [True, False])
    def test_always_passes(self, path, has_session):
        assert decide_route(ROOT, path, "", has_session, CONFIG) == RouteDecision(RouteAction.PASS)


class TestAppHost:
    @pytest.mark.parametrize(
        "path",
        ["/backoffice/login", "/api/auth/login", "/invitation/ABC123", "/onboarding/welcome"],
    )
    @pytest.mark.parametrize("has_session", [True, False])
    def test_public_paths_pass(self, path, has_session):
        assert decide_route(APP, path, "", has_session, CONFIG).action == RouteAction.PASS

    @pytest.mark.parametrize("path", ["/backoffice/loginx", "/backoffice/login-admin", "/onboardingx"])
    def test_lookalike_public_paths_need_a_session(self, path):
        decision = decide_route(APP, path, "", False, CONFIG)

        assert decision.action == RouteAction.REDIRECT
        assert decision.target.startswith("/backoffice/login?callbackUrl=")

    def test_root_with_session_goes_to_backoffice(self):
        decision = decide_route(APP, "/", "", True, CONFIG)
        assert decision == RouteDecision(RouteAction.REDIRECT, "/backoffice")

    def test_root_without_session_goes_to_login(self):
        decision = decide_route(APP, "/", "", False, CONFIG)
        assert decision == RouteDecision(RouteAction.REDIRECT, "/backoffice/login?callbackUrl=%2F")

    def test_unprivileged_path_redirects(self):
        assert decide_route(APP, "/pricing", "", True, CONFIG).target == "/backoffice"
        assert decide_route(APP, "/backofficex", "", True, CONFIG).target == "/backoffice"

    def test_privileged_path_with_session_passes(self):
        assert decide_route(APP, "/backoffice/categories", "", True, CONFIG).action == RouteAction.PASS
        assert decide_route(APP, "/backoffice", "", True, CONFIG).action == RouteAction.PASS

    def test_privileged_path_without_session_redirects_with_callback(self):
        decision = decide_route(APP, "/backoffice/categories", "", False, CONFIG)
        assert decision == RouteDecision(
            RouteAction.REDIRECT, "/backoffice/login?callbackUrl=%2Fbackoffice%2Fcategories"
        )

    def test_callback_keeps_query(self):
        decision = decide_route(APP, "/backoffice/orders", "status=paid", False, CONFIG)
        assert decision.target == "/backoffice/login?callbackUrl=%2Fbackoffice%2Forders%3Fstatus%3Dpaid"


class TestTenantHost:
    def test_root_rewrites_to_slug(self):
        assert decide_route(TACO, "/", "", False, CONFIG) == RouteDecision(RouteAction.REWRITE, "/taco-shop")

    def test_path_is_prefixed_and_query_kept(self):
        decision = decide_route(TACO, "/menu", "lang=en", False, CONFIG)
        assert decision == RouteDecision(RouteAction.REWRITE, "/taco-shop/menu?lang=en")

    @pytest.mark.parametrize("path", ["/taco-shop", "/taco-shop/menu"])
    def test_already_prefixed_passes(self, path):
        assert decide_route(TACO, path, "", False, CONFIG).action == RouteAction.PASS

    def test_similar_prefix_is_still_rewritten(self):
        decision = decide_route(TACO, "/taco-shopping", "", False, CONFIG)
        assert decision.target == "/taco-shop/taco-shopping"

    def test_session_does_not_matter(self):
        assert decide_route(TACO, "/backoffice", "", True, CONFIG) == decide_route(
            TACO, "/backoffice", "", False, CONFIG
        )

    @pytest.mark.parametrize("path", ["/", "/anything", "/backoffice"])
    def test_no_tenant_is_not_found(self, path):
        assert decide_route(NO_TENANT, path, "", True, CONFIG) == RouteDecision(RouteAction.NOT_FOUND)

    @pytest.mark.parametrize("path", ["/", "/menu", "/taco-shop", "/a/b/c", "/taco-shopping"])
    def test_rewrite_is_idempotent(self, path):
        once = tenant_path("taco-shop", path)
        assert tenant_path("taco-shop", once) == once
        assert decide_route(TACO, once, "", False, CONFIG).action == RouteAction.PASS


class TestRouterConfig:
    def test_from_settings_uses_backoffice_prefix(self):
        class FakeSettings:
            BACKOFFICE_PREFIX = "/panel/"

        config = RouterConfig.from_settings(FakeSettings())
        assert config.privileged_prefix == "/panel"
        assert config.login_path == "/panel/login"
        assert decide_route(APP, "/panel/x", "", False, config).target == "/panel/login?callbackUrl=%2Fpanel%2Fx"
