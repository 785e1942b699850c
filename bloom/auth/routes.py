from typing import Optional
import logging

from fastapi import APIRouter, Depends, Body, HTTPException, Cookie, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from bloom.core.database import get_db
from bloom.core.events import ChangeFeed, get_change_feed
from bloom.auth.models import User
from bloom.auth.schemas import (
    DeleteAccountRequest,
    DeleteAccountResponse,
    UserCreate,
    UserOut,
    LoginRequest,
    TokenResponse,
)
from bloom.auth.service import (
    DELETE_CONFIRMATION,
    delete_account_data,
    handle_login,
    handle_signup,
    get_current_user,
    handle_token_refresh,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Auth"])

REFRESH_COOKIE = "refresh_token"


def set_refresh_cookie(response: Response, refresh_token: str):
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=True,
        samesite="none",
        path="/",
    )


def clear_refresh_cookie(response: Response):
    response.delete_cookie(REFRESH_COOKIE, path="/", samesite="none", secure=True, httponly=True)


@router.post(
    "/signup",
    response_model=TokenResponse,
    summary="Register a new user",
    responses={
        200: {"description": "User created successfully"},
        400: {"description": "User already exists or validation error"},
        500: {"description": "Signup failed"},
    },
)
def signup_route(
    response: Response,
    user: UserCreate = Body(...),
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        token_response, refresh_token = handle_signup(user, db)
        set_refresh_cookie(response, refresh_token)
        return token_response
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Signup failed: {e}")
        raise HTTPException(status_code=500, detail="Signup failed")


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive access/refresh tokens",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account deleted"},
        500: {"description": "Server error"},
    },
)
def login_route(
    user: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        token_response, refresh_token = handle_login(user, db)
        set_refresh_cookie(response, refresh_token)
        return token_response
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise HTTPException(status_code=500, detail="Login failed")


@router.get(
    "/me",
    response_model=UserOut,
    summary="Get current user profile",
    responses={
        200: {"description": "User profile returned"},
        401: {"description": "Unauthorized"},
    },
)
def get_profile_route(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token using refresh token",
    responses={
        200: {"description": "Access token refreshed"},
        401: {"description": "No or invalid refresh token"},
        500: {"description": "Token refresh failed"},
    },
)
def refresh_token_route(
    response: Response,
    refresh_token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
) -> TokenResponse:
    if not refresh_token:
        raise HTTPException(status_code=401, detail="No refresh token found")

    try:
        token_response, new_refresh_token = handle_token_refresh(refresh_token, db)
        set_refresh_cookie(response, new_refresh_token)
        return token_response
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Token refresh failed: {e}")
        raise HTTPException(status_code=500, detail="Token refresh failed")


@router.post(
    "/logout",
    summary="Log out the user and clear refresh token cookie",
    responses={
        200: {"description": "User logged out successfully"},
    },
)
def logout_route(response: Response) -> dict:
    clear_refresh_cookie(response)
    return {"detail": "Logged out"}


@router.delete(
    "/account",
    response_model=DeleteAccountResponse,
    summary="Delete account and all of its data",
    description="""
                Permanently erase the user's journal entries, wellness metrics and goals,
                then mark the account as deleted. The user is always signed out, even when
                one of the steps fails; a partial failure is reported with the failed steps.
                """,
    responses={
        200: {"description": "Account data deleted."},
        400: {"description": "Confirmation text missing or wrong."},
        401: {"description": "Unauthorized."},
        500: {"description": "Some data could not be deleted; contact support."},
    },
)
def delete_account_route(
    request: DeleteAccountRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    feed: ChangeFeed = Depends(get_change_feed),
):
    if request.confirmation != DELETE_CONFIRMATION:
        raise HTTPException(
            status_code=400,
            detail=f"Please type '{DELETE_CONFIRMATION}' to confirm account deletion.",
        )

    logger.info(f"Deleting account data for user {user.id}")
    result = delete_account_data(user, db)
    feed.publish(user.id, "account")

    status_code = 200 if result.status == "deleted" else 500
    response = JSONResponse(status_code=status_code, content=result.model_dump())
    clear_refresh_cookie(response)
    return response
