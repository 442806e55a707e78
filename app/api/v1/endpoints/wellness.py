"""
Generated wellness content endpoints.

Always answer 200; a static fallback replaces generated text when the
generator is unavailable.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.wellness import DailyTipResponse, ThoughtInterruptionResponse
from app.services.content_generator import ContentGenerator, get_content_generator
from app.services.wellness_service import WellnessService

router = APIRouter()


@router.get("/daily-tip", summary="Personalised daily wellness tip.", response_model=DailyTipResponse)
def daily_tip(db: Session = Depends(get_db), user: User = Depends(get_current_user),
              generator: ContentGenerator = Depends(get_content_generator), ):
    service = WellnessService(db, generator)
    return DailyTipResponse(tip=service.daily_tip(user))


@router.get("/thought-interruption", summary="Quick thought interruption techniques.",
            response_model=ThoughtInterruptionResponse, )
def thought_interruption(db: Session = Depends(get_db), user: User = Depends(get_current_user),
                         generator: ContentGenerator = Depends(get_content_generator), ):
    service = WellnessService(db, generator)
    return ThoughtInterruptionResponse(techniques=service.thought_interruption_techniques(user))
