import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interview_capture.core import config
from interview_capture.core.auth_dependency import CurrentUser, get_current_user, get_db
from interview_capture.core.errors import internal_error
from interview_capture.core.logging_config import sanitize_log_data
from interview_capture.core.security import hash_password, verify_password, create_user_token
from interview_capture.db.models.company import Company
from interview_capture.db.models.user import User, EMPLOYEE
from interview_capture.schemas.auth import RegisterRequest, LoginRequest, AuthResponse, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _find_company(db: Session, name: str):
    return db.query(Company).filter(Company.name == name).first()


def _get_or_create_company(db: Session, name: str) -> Company:
    company = _find_company(db, name)
    if company:
        return company
    company = Company(name=name)
    db.add(company)
    db.flush()
    logger.info(f"Company created: company_id={company.id}, name={name}")
    return company


def _user_exists(db: Session, email: str) -> bool:
    return db.query(User).filter(User.email == email).first() is not None


def _create_user(db: Session, payload: RegisterRequest, email: str) -> User:
    company = _get_or_create_company(db, payload.company_name or config.DEFAULT_COMPANY_NAME)

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role or EMPLOYEE,
        company_id=company.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User registered: user_id={user.id}, company_id={company.id}, role={user.role}")
    return user


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserOut.model_validate(user), token=create_user_token(user))


def _user_already_exists() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="User already exists"
    )


# ✅ REGISTER
@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a user and return a token.

    Without a company name the user joins DEFAULT_COMPANY_NAME (created on
    first use), so every user always belongs to a company.
    """
    try:
        logger.debug(f"Registration request: {sanitize_log_data(payload.model_dump())}")
        email = payload.email.lower()

        if _user_exists(db, email):
            raise _user_already_exists()

        try:
            user = _create_user(db, payload, email)
        except IntegrityError as e:
            # A concurrent registration won either the email or the company name
            db.rollback()
            logger.warning(f"Registration conflict: {e}")
            if _user_exists(db, email):
                raise _user_already_exists()
            # The company exists now; a second attempt joins it
            user = _create_user(db, payload, email)

        return _auth_response(user)

    except HTTPException:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Registration conflict on retry: {e}")
        raise _user_already_exists()
    except Exception as e:
        db.rollback()
        logger.error(f"Registration failed: {e}", exc_info=True)
        raise internal_error("Registration failed", e)


# ✅ LOGIN
@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.email == payload.email.lower()).first()

        # Same answer for unknown email and wrong password
        if not user or not verify_password(payload.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        logger.info(f"User logged in: user_id={user.id}")
        return _auth_response(user)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}", exc_info=True)
        raise internal_error("Login failed", e)


@router.get("/me", response_model=UserOut)
def me(user: CurrentUser = Depends(get_current_user)):
    """Identity carried by the caller's token."""
    return UserOut(id=user.id, email=user.email, role=user.role, company_id=user.company_id)
