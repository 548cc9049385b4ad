import logging
from typing import Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from storefront.db.models import User, UserRole
from storefront.security.utils import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    token, _ = create_access_token({
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'role': user.role.value,
    })
    return token


def register(
    db: Session,
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> Tuple[User, str]:
    if not username or not email or not password:
        raise ValidationError('Username, email, and password are required')

    existing = db.execute(
        select(User.id).where(or_(User.username == username, User.email == email))
    ).first()
    if existing:
        raise ConflictError('Username or email already exists')

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        phone=phone,
        address=address,
        role=UserRole.customer,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError('Username or email already exists')
    db.refresh(user)
    logger.info('Registered user id=%s username=%s', user.id, user.username)
    return user, issue_token(user)


def login(db: Session, username: Optional[str], password: Optional[str]) -> Tuple[User, str]:
    """Authenticate by username or email.

    Unknown users and wrong passwords produce the same error so callers
    cannot tell which accounts exist.
    """
    if not username or not password:
        raise ValidationError('Username and password are required')
    user = db.execute(
        select(User).where(or_(User.username == username, User.email == username))
    ).scalars().first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthError('Invalid credentials')
    return user, issue_token(user)


def get_profile(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError('User not found')
    return user
