"""Static plan -> feature table.

Every plan check in the application goes through ``plan_allows``.
"""

from enum import Enum as PyEnum

from app.models.subscription import SubscriptionPlan


class FeatureKey(str, PyEnum):
    VIEW_DASHBOARD = "view_dashboard"
    MANAGE_PRODUCTS = "manage_products"
    MANAGE_CATEGORIES = "manage_categories"
    MANAGE_PROFILE = "manage_profile"
    # Premium
    ADD_TO_ORDER = "add_to_order"
    CREATE_ORDERS = "create_orders"
    MANAGE_TRANSLATIONS = "manage_translations"
    MANAGE_TEXTS = "manage_texts"
    CUSTOM_BRANDING = "custom_branding"
    ADVANCED_ANALYTICS = "advanced_analytics"


_STANDARD_FEATURES = frozenset(
    {
        FeatureKey.VIEW_DASHBOARD,
        FeatureKey.MANAGE_PRODUCTS,
        FeatureKey.MANAGE_CATEGORIES,
        FeatureKey.MANAGE_PROFILE,
    }
)

PLAN_FEATURES: dict[SubscriptionPlan, frozenset[FeatureKey]] = {
    SubscriptionPlan.STANDARD: _STANDARD_FEATURES,
    SubscriptionPlan.PREMIUM: _STANDARD_FEATURES
    | {
        FeatureKey.CREATE_ORDERS,
        FeatureKey.MANAGE_TRANSLATIONS,
        FeatureKey.CUSTOM_BRANDING,
        FeatureKey.ADVANCED_ANALYTICS,
        FeatureKey.ADD_TO_ORDER,
        FeatureKey.MANAGE_TEXTS,
    },
}

PLAN_LABELS = {
    SubscriptionPlan.STANDARD: "Standard",
    SubscriptionPlan.PREMIUM: "Premium",
}


def plan_allows(plan: SubscriptionPlan, feature: FeatureKey) -> bool:
    """True iff ``feature`` is in the static feature list of ``plan``."""
    return feature in PLAN_FEATURES.get(plan, frozenset())


def feature_map(plan: SubscriptionPlan) -> dict[str, bool]:
    """Every feature with its availability, used to render locked UI states."""
    return {feature.value: plan_allows(plan, feature) for feature in FeatureKey}
