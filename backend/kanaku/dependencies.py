"""
Shared API dependencies.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.config import settings
from kanaku.services.auth_service import auth_service
from kanaku.services.shop_service import ShopAccess, shop_service
from kanaku.core import security
from kanaku.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/token")


async def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> User:
    """
    Validate access token and return current user.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = security.decode_access_token(token)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("user_id")
    email = payload.get("sub")
    if user_id:
        user = auth_service.get_user_by_id(db, user_id=user_id)
    elif email:
        user = auth_service.get_user_by_email(db, email=email)
    else:
        raise credentials_exception

    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    return user


async def get_shop_access(
    shop_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShopAccess:
    """Resolve the caller's role in the shop named by the {shop_id} path parameter."""
    return shop_service.resolve_access(db, shop_id, current_user)


async def require_admin(access: ShopAccess = Depends(get_shop_access)) -> ShopAccess:
    if not access.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only shop admins can do this",
        )
    return access
