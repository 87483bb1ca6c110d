from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from exam_service.core.config import settings
from exam_service.core.constants import RoleEnum
from exam_service.core.database import SessionLocal
from exam_service.schemas.user import UserContext
from exam_service.utils.permission import PermissionHelper as permission_helper

http_bearer = HTTPBearer()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

async def get_current_user_with_context(
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer)
) -> UserContext:
    """Trust tokens minted by the identity service; no session state is kept here."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            credentials.credentials, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        subject = payload.get("sub")
        role = payload.get("role")
        if subject is None or role is None:
            raise credentials_exception
        return UserContext(user_id=int(subject), role=RoleEnum(role), email=payload.get("email"))
    except (JWTError, ValueError):
        raise credentials_exception

async def get_staff_context(
    context: UserContext = Depends(get_current_user_with_context)
) -> UserContext:
    permission_helper.require_not_student(context)
    return context
