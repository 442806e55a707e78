"""Generated wellness content schemas."""

from app.schemas.base import CamelModel


class DailyTipResponse(CamelModel):
    tip: str


class ThoughtInterruptionResponse(CamelModel):
    techniques: list[str]
