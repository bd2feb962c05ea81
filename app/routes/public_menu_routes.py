from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.menu_service import MenuService
from app.schemas.menu_schemas import PublicMenuResponse

router = APIRouter()


@router.get("/menu/{slug}", response_model=PublicMenuResponse)
async def get_public_menu(slug: str, db: Session = Depends(get_db)):
    """Public menu of a restaurant; no session required"""
    service = MenuService(db)
    return service.get_menu(slug)
