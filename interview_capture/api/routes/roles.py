import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from interview_capture.core.errors import internal_error
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.db.models.role import Role
from interview_capture.schemas.role import RoleCreate, RoleResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=List[RoleResponse])
def list_roles(scope: CompanyScope = Depends(get_company_scope)):
    """Roles of the caller's company, newest first."""
    try:
        roles = scope.roles().order_by(Role.created_at.desc(), Role.id.desc()).all()
        return [RoleResponse.model_validate(role) for role in roles]
    except Exception as e:
        logger.error(f"Failed to list roles: {e}", exc_info=True)
        raise internal_error("Failed to fetch roles", e)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleResponse)
def create_role(payload: RoleCreate, scope: CompanyScope = Depends(get_company_scope)):
    db = scope.db
    try:
        if not scope.company_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User must belong to a company"
            )

        role = Role(
            title=payload.title,
            description=payload.description or None,
            company_id=scope.company_id,
        )
        db.add(role)
        db.commit()
        db.refresh(role)

        logger.info(f"Role created: role_id={role.id}, company_id={scope.company_id}")
        return RoleResponse.model_validate(role)

    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A role with this title already exists"
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create role: {e}", exc_info=True)
        raise internal_error("Failed to create role", e)
