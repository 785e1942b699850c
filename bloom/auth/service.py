import logging
from fastapi import HTTPException, Depends
from sqlalchemy.orm import Session
from uuid import UUID, uuid4
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import List, Optional, Tuple

from bloom.core.clock import utcnow
from bloom.core.database import get_db
from bloom.auth.models import User
from bloom.auth.schemas import UserCreate, LoginRequest, UserOut, TokenResponse, DeleteAccountResponse
from bloom.core.config import (
    SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS, SUPPORT_CONTACT
)
from bloom.goals.db import delete_all_goals
from bloom.journals.db import delete_all_entries
from bloom.metrics.db import delete_all_metrics

# Initialize logger and security tools
logger = logging.getLogger(__name__)
pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer = HTTPBearer()

DELETE_CONFIRMATION = "DELETE"


def hash_password(password: str) -> str:
    """
    Hashes a plaintext password using bcrypt.

    Args:
        password (str): Raw password input.

    Returns:
        str: Bcrypt-hashed password.
    """
    return pwd.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd.verify(plain_password, hashed_password)


def create_token(user_id: UUID, token_type: str = "access", expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    if not expires_delta:
        if token_type == "access":
            expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        else:
            expires_delta = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    payload = {
        "sub": str(user_id),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Args:
        token (str): JWT string.

    Returns:
        dict: Decoded payload.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"verify_aud": False})
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")


def _access_token_user_id(creds: HTTPAuthorizationCredentials) -> UUID:
    payload = decode_token(creds.credentials)
    if payload.get("type") != "access":
        raise HTTPException(status_code=401, detail="Access token required")
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing subject field")
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user ID in token")


def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    """
    Fetches the full user object from the database using token credentials.

    Raises:
        HTTPException: If user not found or the account was deleted.
    """
    user_id = _access_token_user_id(creds)
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if user.account_deleted:
        raise HTTPException(status_code=401, detail="Account has been deleted")
    return user


def get_current_user_id(user: User = Depends(get_current_user)) -> UUID:
    """
    Returns the ID of the authenticated user.

    The user row is loaded on every request, so tokens issued before an
    account was deleted stop working immediately.
    """
    return user.id


def _issue_tokens(user: User) -> Tuple[TokenResponse, str]:
    access_token = create_token(user.id, token_type="access")
    refresh_token = create_token(user.id, token_type="refresh")
    return TokenResponse(access_token=access_token, user=UserOut.model_validate(user)), refresh_token


def handle_signup(req: UserCreate, db: Session) -> Tuple[TokenResponse, str]:
    """
    Handles user signup using email and password.

    Args:
        req (UserCreate): Signup request data.
        db (Session): DB session.

    Returns:
        Tuple[TokenResponse, str]: Tokens for the new user and a refresh token.
    """
    email = req.email.lower().strip()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already exists")
    user = User(id=uuid4(), email=email, name=req.name, password=hash_password(req.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return _issue_tokens(user)


def handle_login(req: LoginRequest, db: Session) -> Tuple[TokenResponse, str]:
    email = req.email.lower().strip()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(req.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if user.account_deleted:
        raise HTTPException(status_code=403, detail="This account has been deleted")
    return _issue_tokens(user)


def handle_token_refresh(refresh_token: str, db: Session) -> Tuple[TokenResponse, str]:
    """
    Verifies the refresh token and issues a new access + refresh token pair.

    Args:
        refresh_token (str): The token from the cookie.
        db (Session): Active DB session.

    Returns:
        Tuple[TokenResponse, str]: New access token, user info and refresh token.
    """
    payload = decode_token(refresh_token)
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Invalid token type")
    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user ID in token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user or user.account_deleted:
        raise HTTPException(status_code=401, detail="User not found")
    return _issue_tokens(user)


def delete_account_data(user: User, db: Session) -> DeleteAccountResponse:
    """
    Erases a user's entries, metrics and goals, then flags the account as deleted.

    Each step runs on its own; a failing step is recorded and the remaining
    steps still run. The account flag is only set once all data is gone.

    Args:
        user (User): The authenticated user.
        db (Session): Active DB session.

    Returns:
        DeleteAccountResponse: "deleted", or "partial" with the failed step names.
    """
    failed: List[str] = []
    steps = (
        ("entries", delete_all_entries),
        ("metrics", delete_all_metrics),
        ("goals", delete_all_goals),
    )
    for name, step in steps:
        try:
            count = step(db, user.id)
            logger.info(f"Deleted {count} {name} rows for user {user.id}")
        except Exception as e:
            logger.error(f"Account deletion step '{name}' failed for user {user.id}: {e}")
            failed.append(name)

    if not failed:
        try:
            user.email_backup = user.email
            user.account_deleted = True
            user.deleted_at = utcnow()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to mark account {user.id} as deleted: {e}")
            failed.append("account")

    if failed:
        return DeleteAccountResponse(
            status="partial",
            detail=(
                "Some of your data could not be deleted. You have been signed out; "
                f"please try again or contact {SUPPORT_CONTACT}."
            ),
            failed_steps=failed,
        )
    return DeleteAccountResponse(status="deleted", detail="Account data permanently deleted")
