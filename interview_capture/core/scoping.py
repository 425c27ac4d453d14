"""
Company scoping for every tenant-owned query.

Routes never filter by company themselves; they go through a CompanyScope,
which only ever hands out queries already restricted to the caller's company.
An entity owned by another company is indistinguishable from a missing one.
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session, Query

from interview_capture.core.auth_dependency import CurrentUser, get_current_user, get_db
from interview_capture.db.models.role import Role
from interview_capture.db.models.process import Process
from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.db.models.interview_response import InterviewResponse
from interview_capture.db.models.knowledge import KnowledgeArtifact


class CompanyScope:
    def __init__(self, db: Session, user: CurrentUser):
        self.db = db
        self.user = user
        self.company_id = user.company_id

    # Queries

    def roles(self) -> Query:
        return self.db.query(Role).filter(Role.company_id == self.company_id)

    def processes(self) -> Query:
        return self.db.query(Process).filter(Process.company_id == self.company_id)

    def sessions(self) -> Query:
        # Sessions belong to a company through their role
        return (
            self.db.query(InterviewSession)
            .join(Role, InterviewSession.role_id == Role.id)
            .filter(Role.company_id == self.company_id)
        )

    def responses(self) -> Query:
        return (
            self.db.query(InterviewResponse)
            .join(InterviewSession, InterviewResponse.session_id == InterviewSession.id)
            .join(Role, InterviewSession.role_id == Role.id)
            .filter(Role.company_id == self.company_id)
        )

    def artifacts(self) -> Query:
        return (
            self.db.query(KnowledgeArtifact)
            .join(Role, KnowledgeArtifact.role_id == Role.id)
            .filter(Role.company_id == self.company_id)
        )

    # Lookups

    def get_role(self, role_id: int) -> Optional[Role]:
        return self.roles().filter(Role.id == role_id).first()

    def get_process(self, process_id: int) -> Optional[Process]:
        return self.processes().filter(Process.id == process_id).first()

    def get_session(self, session_id: int) -> Optional[InterviewSession]:
        return self.sessions().filter(InterviewSession.id == session_id).first()

    def get_response(self, response_id: int) -> Optional[InterviewResponse]:
        return self.responses().filter(InterviewResponse.id == response_id).first()

    def get_artifact(self, artifact_id: int) -> Optional[KnowledgeArtifact]:
        return self.artifacts().filter(KnowledgeArtifact.id == artifact_id).first()


def get_company_scope(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CompanyScope:
    """Dependency: the authenticated caller's company scope."""
    return CompanyScope(db, user)
