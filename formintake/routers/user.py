from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..crud.users import get_user
from ..db.session import get_db
from ..deps.auth import AuthContext, require_user
from ..schemas.auth import SessionUser, UserEnvelope

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.get("/me", response_model=UserEnvelope)
def api_me(auth: AuthContext = Depends(require_user), db: Session = Depends(get_db)):
    user = get_user(db, auth.user_id)
    if not user:
        raise HTTPException(404, "Not found")
    return UserEnvelope(user=SessionUser(id=user.id, email=user.email, name=user.name))
