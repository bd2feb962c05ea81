"""Subscription plan and status enums carried by tenants and sessions."""

from enum import Enum as PyEnum


class SubscriptionPlan(str, PyEnum):
    STANDARD = "standard"
    PREMIUM = "premium"


class SubscriptionStatus(str, PyEnum):
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
