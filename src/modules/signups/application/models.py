"""Signup application read models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.modules.signups.domain.entities import FormInteraction


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversionRates(_CamelModel):
    """Percentages, 0 when the denominator is 0."""

    visit_to_start: float = 0.0
    start_to_submit: float = 0.0
    overall_conversion: float = 0.0


class FormAnalytics(_CamelModel):
    total_page_visits: int = 0
    total_form_starts: int = 0
    total_form_abandons: int = 0
    total_form_submits: int = 0
    conversion_rates: ConversionRates = Field(default_factory=ConversionRates)
    field_interactions: dict[str, int] = Field(default_factory=dict)
    app_selection_analytics: dict[str, int] = Field(default_factory=dict)
    recent_interactions: list[FormInteraction] = Field(default_factory=list)
    abandonment_points: dict[str, int] = Field(default_factory=dict)


class SendInvitesResult(_CamelModel):
    success: bool = True
    emails_sent: int = 0
    failed_emails: list[str] = Field(default_factory=list)
    message: str = ""
