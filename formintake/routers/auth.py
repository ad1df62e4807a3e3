from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..core.security import issue_access_token, verify_password
from ..crud.users import create_user, get_user_by_email, normalize_email
from ..db.session import get_db
from ..schemas.auth import Credentials, LoginResponse, RegisterRequest, SessionUser, UserEnvelope
from ..services.identity import clear_session, store_session_user

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=UserEnvelope, summary="Create an account")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    email = normalize_email(payload.email or "")
    if not email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing credentials")
    if get_user_by_email(db, email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User exists")
    user = create_user(db, email=email, password=payload.password, name=payload.name)
    return UserEnvelope(user=SessionUser(id=user.id, email=user.email, name=user.name))


@router.post("/login", response_model=LoginResponse, summary="Exchange credentials for a JWT and a session")
def login(payload: Credentials, request: Request, db: Session = Depends(get_db)):
    email = normalize_email(payload.email or "")
    if not email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing credentials")
    user = get_user_by_email(db, email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    identity = SessionUser(id=user.id, email=user.email, name=user.name)
    store_session_user(request, identity)
    token = issue_access_token(user.id, email=user.email)
    return LoginResponse(token=token, user=identity)


@router.post("/logout")
def logout(request: Request):
    clear_session(request)
    return {"success": True}
