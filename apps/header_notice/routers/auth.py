"""Sign-in for the settings screen."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from sqlalchemy.orm import Session
from sqlalchemy import select

from apps.header_notice.deps import get_db
from apps.header_notice.models.site_user import SiteUser
from apps.header_notice.auth import (
    get_password_hash,
    create_access_token,
    verify_password,
    get_current_principal,
)
from apps.header_notice.config import get_settings
from apps.header_notice.services.notice_settings import ADMIN_CAPABILITY, Principal

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


def ensure_admin_user(db: Session) -> None:
    s = get_settings()
    existing = db.execute(select(SiteUser).where(SiteUser.email == s.admin_default_email)).scalar_one_or_none()
    if existing:
        return
    db.add(
        SiteUser(
            email=s.admin_default_email,
            password_hash=get_password_hash(s.admin_default_password),
            capabilities=[ADMIN_CAPABILITY],
        )
    )
    db.commit()


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    ensure_admin_user(db)
    user = db.execute(select(SiteUser).where(SiteUser.email == data.email)).scalar_one_or_none()
    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="User is disabled")
    token = create_access_token(
        {"sub": str(user.id), "email": user.email, "caps": list(user.capabilities or [])}
    )
    return TokenResponse(access_token=token)


@router.get("/me")
def me(principal: Principal = Depends(get_current_principal)):
    return {"id": principal.subject, "capabilities": sorted(principal.capabilities)}
