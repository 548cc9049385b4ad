from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_current_identity
from storefront.api.v1.schemas import (
    RegisterPayload,
    LoginPayload,
    AuthResponse,
    ProfileResponse,
    UserRead,
)
from storefront.services import accounts

router = APIRouter()  # main.py mounts at API_PREFIX


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterPayload, db: Session = Depends(get_db)) -> AuthResponse:
    user, token = accounts.register(
        db,
        username=payload.username,
        email=str(payload.email) if payload.email else None,
        password=payload.password,
        full_name=payload.full_name,
        phone=payload.phone,
        address=payload.address,
    )
    return AuthResponse(message="User registered successfully", token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginPayload, db: Session = Depends(get_db)) -> AuthResponse:
    user, token = accounts.login(db, payload.username, payload.password)
    return AuthResponse(message="Login successful", token=token, user=UserRead.model_validate(user))


@router.get("/profile", response_model=ProfileResponse)
def profile(identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)) -> ProfileResponse:
    user = accounts.get_profile(db, identity["id"])
    return ProfileResponse(user=UserRead.model_validate(user))
