"""
FastAPI dependencies (DB session, authentication, ledger store)
"""
from fastapi import Depends, Request, HTTPException, status
from sqlalchemy.orm import Session

from app.application.ledger_store import LedgerStore
from app.infrastructure.db.session import get_db as _get_db
from app.infrastructure.db.models import User
from app.infrastructure.db.ledger_store import SqlLedgerStore


# Re-export get_db for convenience
get_db = _get_db


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Current user from the session cookie

    Raises:
        HTTPException(401): not logged in, or the account is gone / disabled

    Usage:
        @router.get("/me")
        def me(user: User = Depends(get_current_user)):
            ...
    """
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No autenticado"
        )

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no encontrado"
        )

    return user


def get_current_account_id(user: User = Depends(get_current_user)) -> int:
    """Every ledger row is owned by the user's account (account_id = user.id)"""
    return user.id


def get_ledger_store(db: Session = Depends(get_db)) -> LedgerStore:
    """Request-scoped store sharing the request's DB session"""
    return SqlLedgerStore(db)
