"""Page endpoints reached through the edge gate.

Pages answer with the JSON payload a frontend renders. On tenant hosts the
edge gate rewrites every path under ``/{slug}``, so ``/{slug}`` must stay
the last route registered.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.core.authorization import ensure_authenticated, is_subscription_blocked
from app.core.exceptions import NotFoundException
from app.core.permissions import feature_map
from app.database import get_db
from app.dependencies import get_optional_identity
from app.models.session_identity import SessionIdentity
from app.routing.host_resolver import is_valid_slug
from app.schemas.auth_schemas import SessionResponse
from app.services.menu_service import MenuService
from app.schemas.menu_schemas import PublicMenuResponse

router = APIRouter()


@router.get("/")
async def marketing_page():
    return {
        "page": "marketing",
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "backoffice_url": f"https://{settings.APP_SUBDOMAIN}.{settings.BASE_DOMAIN}{settings.BACKOFFICE_PREFIX}",
    }


@router.get(settings.login_path)
async def login_page(request: Request, identity: SessionIdentity | None = Depends(get_optional_identity)):
    return {
        "page": "login",
        "callback_url": request.query_params.get("callbackUrl") or settings.BACKOFFICE_PREFIX,
        "authenticated": identity is not None,
    }


@router.get(settings.BACKOFFICE_PREFIX)
async def backoffice_home(identity: SessionIdentity | None = Depends(get_optional_identity)):
    """
    Backoffice home: who is logged in, which features are locked by the
    plan, and whether the subscription blocks editing.
    """
    identity = ensure_authenticated(identity)
    return {
        "page": "backoffice",
        "session": SessionResponse.model_validate(identity),
        "features": feature_map(identity.subscription_plan),
        "subscription_blocked": is_subscription_blocked(identity),
    }


@router.get("/{slug}", response_model=PublicMenuResponse)
async def tenant_menu_page(slug: str, db: Session = Depends(get_db)):
    if not is_valid_slug(slug):
        raise NotFoundException("Restaurant not found")
    service = MenuService(db)
    return service.get_menu(slug)
