from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.core.security import validate_session_token
from app.core.session_cookie import clear_session_cookie, set_session_cookie
from app.database import get_db
from app.dependencies import get_current_identity, get_current_user
from app.models.session_identity import SessionIdentity
from app.models.user import User
from app.services.auth_service import AuthService
from app.schemas.auth_schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionResponse,
)

router = APIRouter()
backoffice_router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    """
    Verify credentials and start a session.

    The token is set as an HTTP-only cookie and also returned in the body
    for API clients that send it as a Bearer token.
    """
    service = AuthService(db)
    _, token = service.login(data.identifier, data.password)
    set_session_cookie(response, token, request)
    # Decode back to report the issued window
    identity = validate_session_token(token)
    return LoginResponse(access_token=token, session=SessionResponse.model_validate(identity))


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response):
    """Sessions are stateless; logging out only clears the cookie"""
    clear_session_cookie(response, request)
    return MessageResponse(message="Logged out")


@router.get("/session", response_model=SessionResponse)
async def get_session(identity: SessionIdentity = Depends(get_current_identity)):
    """Claims of the current session token"""
    return identity


@backoffice_router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change the password of the logged-in user"""
    service = AuthService(db)
    service.change_password(user.id, data.current_password, data.new_password)
    return MessageResponse(message="Password updated")
