"""Signup form funnel analytics."""

from collections import Counter, defaultdict

from src.modules.signups.application.models import ConversionRates, FormAnalytics
from src.modules.signups.domain.entities import FormEventType, FormInteraction
from src.modules.signups.domain.repository import FormInteractionRepository

TRACKED_FIELDS = ("name", "email", "socialMedia", "appSelection", "comments")
FIRST_FIELD = "name"
RECENT_LIMIT = 20


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def _abandonment_key(field_name: str) -> str:
    return f"after{field_name[:1].upper()}{field_name[1:]}"


def compute_abandonment_points(
    interactions: list[FormInteraction],
) -> dict[str, int]:
    """Count where unsubmitted sessions stopped.

    A session counts when it has more than one event and no submit; it is
    attributed to the last field it touched, in time order.
    """
    points = {_abandonment_key(field): 0 for field in TRACKED_FIELDS}

    sessions: dict[str, list[FormInteraction]] = defaultdict(list)
    for interaction in interactions:
        sessions[interaction.session_id].append(interaction)

    for events in sessions.values():
        if len(events) <= 1:
            continue
        if any(e.event_type == FormEventType.FORM_SUBMIT for e in events):
            continue
        touched = sorted((e for e in events if e.field_name), key=lambda e: e.timestamp)
        if not touched:
            continue
        key = _abandonment_key(touched[-1].field_name)
        if key in points:
            points[key] += 1

    return points


def compute_form_analytics(interactions: list[FormInteraction]) -> FormAnalytics:
    """Aggregate interactions (newest first) into funnel numbers."""
    event_counts = Counter(i.event_type for i in interactions)
    page_visits = event_counts[FormEventType.PAGE_VISIT.value]
    form_submits = event_counts[FormEventType.FORM_SUBMIT.value]
    form_starts = sum(
        1
        for i in interactions
        if i.event_type == FormEventType.FIELD_FOCUS and i.field_name == FIRST_FIELD
    )

    field_counts = Counter(i.field_name for i in interactions if i.field_name)
    app_counts = Counter(i.app_selection for i in interactions if i.app_selection)

    return FormAnalytics(
        total_page_visits=page_visits,
        total_form_starts=form_starts,
        total_form_abandons=event_counts[FormEventType.FORM_ABANDON.value],
        total_form_submits=form_submits,
        conversion_rates=ConversionRates(
            visit_to_start=_percent(form_starts, page_visits),
            start_to_submit=_percent(form_submits, form_starts),
            overall_conversion=_percent(form_submits, page_visits),
        ),
        field_interactions={field: field_counts[field] for field in TRACKED_FIELDS},
        app_selection_analytics=dict(app_counts),
        recent_interactions=interactions[:RECENT_LIMIT],
        abandonment_points=compute_abandonment_points(interactions),
    )


class FormAnalyticsService:
    def __init__(self, interaction_repository: FormInteractionRepository):
        self.interaction_repository = interaction_repository

    async def get_analytics(self) -> FormAnalytics:
        interactions = await self.interaction_repository.list_newest_first()
        return compute_form_analytics(interactions)
