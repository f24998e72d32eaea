"""
Authentication routes (login, logout, current user)
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.api.v1.common import envelope
from app.auth import authenticate
from app.infrastructure.db.models import User
from app.utils.clock import local_now


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str  # e-mail or quiniela agency number
    password: str


def _user_data(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "email": user.email,
        "quiniela_number": user.quiniela_number,
    }


@router.post("/login")
def login(
    request: Request,
    req: LoginRequest,
    db: Session = Depends(get_db),
):
    user = authenticate(db, req.username, req.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
        )

    request.session["user_id"] = user.id
    user.last_login_at = local_now()
    db.commit()

    return envelope("Inicio de sesión exitoso", _user_data(user))


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return envelope("Sesión cerrada")


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return envelope("Usuario actual", _user_data(user))
