"""
User profile endpoints.

Onboarding, language preference, data export and integrity check.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.export import DataExportResponse, DataIntegrityResponse
from app.schemas.user import LanguageUpdate, OnboardingRequest, OnboardingResponse, UserResponse
from app.services.user_service import UserService

router = APIRouter()


@router.post("/onboarding", summary="Save onboarding answers.", response_model=OnboardingResponse)
def complete_onboarding(data: OnboardingRequest, db: Session = Depends(get_db),
                        user: User = Depends(get_current_user), ):
    service = UserService(db)
    user = service.complete_onboarding(user, data)
    return OnboardingResponse(user=UserResponse.model_validate(user))


@router.put("/language", summary="Set the preferred language.", response_model=UserResponse)
def update_language(data: LanguageUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = UserService(db)
    return service.update_language(user, data.language)


@router.get("/export", summary="Export everything stored about the current user.",
            response_model=DataExportResponse, )
def export_data(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service = UserService(db)
    return service.export_data(user.id)


@router.get("/data-integrity", summary="Check cached counts against the progress ledger.",
            response_model=DataIntegrityResponse, )
def data_integrity(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    Row counts for the current user and the list of enrollments whose cached
    ``completedCount`` disagrees with the ledger.
    """
    service = UserService(db)
    return service.data_integrity(user.id)
