"""
Authentication Router

Endpoints for lister sign-in and token management.
"""
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from src.studenthousing.api.auth import (
    authenticate_lister,
    create_access_token,
    get_current_lister,
    Token,
)
from src.studenthousing.api.dependencies import get_db, get_settings
from src.studenthousing.api.schemas import ListerRead
from src.studenthousing.db.models import Lister
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    app_settings=Depends(get_settings),
):
    """
    OAuth2 compatible token login.

    Args:
        form_data: Username and password from OAuth2 form
        db: Database session
        app_settings: Application settings

    Returns:
        Access token and token type

    Raises:
        HTTPException: If authentication fails
    """
    lister = authenticate_lister(db, form_data.username, form_data.password)
    if not lister:
        logger.info("login_failed", username=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(
        data={"sub": lister.username},
        expires_delta=timedelta(minutes=app_settings.access_token_expire_minutes),
    )
    logger.info("login_succeeded", username=lister.username)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=ListerRead)
def read_current_lister(current_lister: Lister = Depends(get_current_lister)):
    """
    Get the authenticated lister's profile and listings.
    """
    return current_lister
