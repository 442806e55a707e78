"""
Challenge endpoints.

Catalog, enrollment and daily progress.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.challenge import (
    ActiveChallengeResponse,
    ChallengeResponse,
    CompletedChallengeResponse,
    EnrollmentResponse,
    JoinChallengeRequest,
    ProgressResponse,
    ProgressUpdateRequest,
)
from app.services.challenge_service import ChallengeService
from app.services.progress_service import ProgressService

router = APIRouter()


@router.get("/catalog", summary="Every challenge on offer.", response_model=list[ChallengeResponse])
def get_catalog(db: Session = Depends(get_db)):
    return ChallengeService(db).catalog()


@router.get("/available", summary="Challenges the user has not joined yet.",
            response_model=list[ChallengeResponse], )
def list_available(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = ChallengeService(db)
    return service.list_available(user.id)


@router.get("/active", summary="Joined challenges with their progress.",
            response_model=list[ActiveChallengeResponse], )
def list_active(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = ChallengeService(db)
    return service.list_active(user.id)


@router.get("/completed", summary="Challenges the user has finished.",
            response_model=list[CompletedChallengeResponse], )
def list_completed(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = ChallengeService(db)
    return service.list_completed(user.id)


@router.post("/join", summary="Join a challenge.", response_model=EnrollmentResponse)
def join_challenge(data: JoinChallengeRequest, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    """
    Idempotent: joining again returns the existing enrollment untouched
    apart from its last activity time.

    Raises:
        HTTPException 400: Unknown challenge id
    """
    service = ChallengeService(db)
    return service.enroll(user.id, data.challenge_id)


@router.post("/progress", summary="Mark a day of a challenge as done.", response_model=ProgressResponse)
def update_progress(data: ProgressUpdateRequest, db: Session = Depends(get_db),
                    user: User = Depends(get_current_user), ):
    """
    Record a completed day. Marking the same day twice counts once.
    Joins the challenge first if the user has not.

    Raises:
        HTTPException 400: Unknown challenge id
    """
    service = ProgressService(db)
    return service.record_completion(user.id, data.challenge_id, date=data.date, completed=data.completed)


@router.get("/{challenge_id}/progress", summary="Progress for one joined challenge.",
            response_model=ProgressResponse, )
def get_progress(challenge_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = ProgressService(db)
    return service.get_progress(user.id, challenge_id)
