"""
Auth API endpoints: registration, login and the current session.
"""

import logging

from django.db import IntegrityError, transaction
from django.http import HttpRequest
from ninja import Router

from apps.users.models import User, UserRole
from apps.users.schemas import UserProfileOut
from utils.auth import AuthBearer, create_token, get_current_user
from utils.errors import AuthenticationRequired, ValidationError
from utils.passwords import hash_password, verify_password
from .schemas import LoginIn, RegisterIn, AuthOut

logger = logging.getLogger(__name__)

router = Router()


@router.post("/register", response={201: AuthOut})
def register(request: HttpRequest, data: RegisterIn):
    """Register a new reader account."""
    email = data.email.lower().strip()

    if User.objects.filter(email=email).exists():
        raise ValidationError("Email already registered")

    try:
        with transaction.atomic():
            user = User.objects.create(
                email=email,
                password=hash_password(data.password),
                name=data.name.strip(),
                role=UserRole.READER,
            )
    except IntegrityError:
        raise ValidationError("Email already registered")

    logger.info(f"[Auth] Registered user {user.id}")
    token = create_token(user)
    return 201, AuthOut(user=user, token=token)


@router.post("/login", response=AuthOut)
def login(request: HttpRequest, data: LoginIn):
    """Login with email and password."""
    email = data.email.lower().strip()

    user = User.objects.filter(email=email).first()
    if not user or not user.password:
        raise AuthenticationRequired("Invalid email or password")

    if not verify_password(data.password, user.password):
        logger.info(f"[Auth] Failed login for {user.id}")
        raise AuthenticationRequired("Invalid email or password")

    token = create_token(user)
    return AuthOut(user=user, token=token)


@router.get("/me", response=UserProfileOut, auth=AuthBearer())
def get_me(request: HttpRequest):
    """Get current authenticated user."""
    user = get_current_user(request)
    return UserProfileOut.from_orm(user)
