"""Signup row mappers."""

from src.core.infrastructure.database.mapper import RowMapper
from src.modules.signups.domain.entities import FormInteraction, Signup
from src.modules.signups.infrastructure.models import (
    FormInteractionModel,
    SignupModel,
)


class SignupMapper(RowMapper[Signup, SignupModel]):
    def to_domain(self, model: SignupModel) -> Signup:
        return Signup(
            id=model.id,
            name=model.name,
            email=model.email,
            app=model.app,
            social_media=model.social_media,
            comments=model.comments,
            email_sent=model.email_sent,
            email_sent_at=model.email_sent_at,
            created_at=model.created_at,
        )


class FormInteractionMapper(RowMapper[FormInteraction, FormInteractionModel]):
    def to_domain(self, model: FormInteractionModel) -> FormInteraction:
        return FormInteraction(
            id=model.id,
            session_id=model.session_id,
            event_type=model.event_type,
            field_name=model.field_name,
            email=model.email,
            name=model.name,
            app_selection=model.app_selection,
            user_agent=model.user_agent,
            referrer=model.referrer,
            timestamp=model.timestamp,
        )
