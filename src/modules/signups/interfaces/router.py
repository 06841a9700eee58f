"""Admin signup data API routes."""

from fastapi import APIRouter, Depends

from src.modules.admin_auth.interfaces.guard import require_admin_session
from src.modules.signups.application.analytics_service import FormAnalyticsService
from src.modules.signups.application.commands import SendInvitesCommand
from src.modules.signups.application.dependencies import (
    get_form_analytics_service,
    get_send_invites_handler,
    get_signup_repository,
)
from src.modules.signups.application.handlers import SendInvitesHandler
from src.modules.signups.application.models import FormAnalytics, SendInvitesResult
from src.modules.signups.domain.repository import SignupRepository
from src.modules.signups.interfaces.schemas import SendInvitesRequest, SignupResponse

router = APIRouter(
    prefix="/admin",
    tags=["admin-signups"],
    dependencies=[Depends(require_admin_session)],
)


@router.get(
    "/signups",
    response_model=list[SignupResponse],
    summary="List signups",
    description="All pre-beta signups, newest first",
)
async def list_signups(
    repository: SignupRepository = Depends(get_signup_repository),
) -> list[SignupResponse]:
    signups = await repository.list_newest_first()
    return [SignupResponse.model_validate(s.model_dump()) for s in signups]


@router.get(
    "/form-analytics",
    response_model=FormAnalytics,
    response_model_by_alias=True,
    summary="Signup form funnel analytics",
)
async def form_analytics(
    service: FormAnalyticsService = Depends(get_form_analytics_service),
) -> FormAnalytics:
    return await service.get_analytics()


@router.post(
    "/send-invites",
    response_model=SendInvitesResult,
    response_model_by_alias=True,
    summary="Send beta invites",
)
async def send_invites(
    body: SendInvitesRequest,
    handler: SendInvitesHandler = Depends(get_send_invites_handler),
) -> SendInvitesResult:
    command = SendInvitesCommand(
        app=body.app, invite_link=body.invite_link, emails=body.emails
    )
    return await handler.handle(command)
