"""
JWT Authentication for FastAPI

Bearer tokens for listers, with bcrypt password hashes stored on the lister row.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config.settings import settings
from src.studenthousing.api.dependencies import get_db
from src.studenthousing.db.models import Lister
from src.studenthousing.db.repository import ListerRepository
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/token")


class Token(BaseModel):
    """Token response model."""
    access_token: str
    token_type: str


class TokenData(BaseModel):
    """Token payload data."""
    username: Optional[str] = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Bcrypt hashed password

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hashed password
    """
    return pwd_context.hash(password)


def authenticate_lister(db: Session, username: str, password: str) -> Optional[Lister]:
    """
    Authenticate a lister with username and password.

    Listers registered without a password cannot sign in.

    Args:
        db: Database session
        username: Username
        password: Plain text password

    Returns:
        Lister if authentication succeeds, None otherwise
    """
    lister = ListerRepository().get_by_username(db, username.strip())
    if not lister or not lister.password_hash:
        return None
    if not verify_password(password, lister.password_hash):
        return None
    return lister


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token.

    Args:
        data: Token payload data
        expires_delta: Token expiration time delta

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def get_current_lister(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Lister:
    """
    Get the lister identified by a JWT access token.

    Args:
        token: JWT access token
        db: Database session

    Returns:
        Current lister

    Raises:
        HTTPException: If token is invalid or lister not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = TokenData(username=username)
    except JWTError:
        logger.info("token_rejected")
        raise credentials_exception

    lister = ListerRepository().get_by_username(db, token_data.username)
    if lister is None:
        raise credentials_exception
    return lister


def require_owner(username: str, current_lister: Lister) -> None:
    """
    Ensure the authenticated lister is acting on its own resources.

    Args:
        username: Username from the request path
        current_lister: Authenticated lister

    Raises:
        HTTPException: 403 if the usernames differ
    """
    if current_lister.username != username:
        logger.warning(
            "forbidden_cross_lister_write",
            actor=current_lister.username,
            target=username,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to modify another lister's data",
        )
