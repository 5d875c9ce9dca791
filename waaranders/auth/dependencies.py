"""FastAPI dependencies for authentication and role checks."""

from typing import Dict
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from waaranders.database.database import get_db
from waaranders.database.models import VolunteerDB
from waaranders.database.role_repository import RoleRepository
from waaranders.auth.jwt import decode_access_token
from waaranders.models.volunteer import Volunteer

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Dict:
    """Validate the bearer token and return its claims.

    Raises:
        HTTPException: If the token is missing, invalid or has no subject
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_access_token(credentials.credentials)
    if not claims or not claims.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def get_current_volunteer(
    claims: Dict = Depends(get_token_claims),
    db: Session = Depends(get_db),
) -> Volunteer:
    """Get the volunteer profile belonging to the token's subject.

    Raises:
        HTTPException: If no profile exists for the user yet
    """
    volunteer_db = db.query(VolunteerDB).filter(VolunteerDB.id == claims["sub"]).first()
    if not volunteer_db:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Volunteer profile not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return volunteer_db.to_pydantic()


def require_doenker_or_admin(
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
) -> Volunteer:
    """Allow doenkers and admins (management screens)."""
    if not RoleRepository(db).is_doenker_or_admin(current.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current


def require_admin(
    current: Volunteer = Depends(get_current_volunteer),
    db: Session = Depends(get_db),
) -> Volunteer:
    """Allow admins only (role management)."""
    if not RoleRepository(db).is_admin(current.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin rights required")
    return current
