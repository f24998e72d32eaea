from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.infrastructure.db.models import User

# pbkdf2_sha256: primary (no native deps)
# bcrypt: accepted for hashes imported from the previous system
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated=["bcrypt"])


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Login name may be the e-mail or the quiniela agency number"""
    username = username.strip()
    return db.query(User).filter(
        (User.username == username) | (User.email == username) | (User.quiniela_number == username)
    ).first()


def authenticate(db: Session, username: str, password: str) -> User | None:
    user = get_user_by_username(db, username)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
