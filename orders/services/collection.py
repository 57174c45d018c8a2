import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from orders.models import ExamOrder
from orders.services import repository
from orders.services.lifecycle import save_order_edit

logger = logging.getLogger(__name__)

COLLECTION_SLA_MINUTES = 60

STATE_NONE = 'none'
STATE_REQUESTED = 'requested'
STATE_PENDING = 'pending'
STATE_OVERDUE = 'overdue'
STATE_COMPLETE = 'complete'
STATE_COMPLETE_LATE = 'complete_late'


@dataclass(frozen=True)
class CollectionTrackingState:
    state: str
    message: str
    is_overdue: bool = False
    minutes: int | None = None
    deadline: datetime | None = None

    @property
    def css_class(self):
        banner = {STATE_COMPLETE_LATE: STATE_OVERDUE}.get(self.state, self.state)
        return f'collection-banner collection-banner-{banner}'


def get_sla_minutes():
    return getattr(settings, 'CVDE_COLLECTION_SLA_MINUTES', COLLECTION_SLA_MINUTES)


def get_collection_deadline(driver_requested_at, sla_minutes=None):
    if driver_requested_at is None:
        return None
    return driver_requested_at + timedelta(minutes=sla_minutes or get_sla_minutes())


def _ceil_minutes(delta):
    return math.ceil(abs(delta.total_seconds()) / 60)


def format_minutes_label(minutes):
    return f'{minutes} minute{"" if minutes == 1 else "s"}'


def get_collection_tracking_state(
    request_collection,
    driver_collection_requested,
    driver_requested_at,
    sample_received_at,
    now,
    sla_minutes=None,
):
    """Derive the collection banner for an order at ``now``.

    Rules are checked in priority order; only ``overdue`` sets ``is_overdue``.
    """
    if not request_collection:
        return CollectionTrackingState(STATE_NONE, 'No collection requested for this order.')

    if not driver_collection_requested or driver_requested_at is None:
        return CollectionTrackingState(
            STATE_REQUESTED,
            'Collection requested by vet. Driver still needs to be contacted.',
        )

    sla_minutes = sla_minutes or get_sla_minutes()
    deadline = get_collection_deadline(driver_requested_at, sla_minutes)
    target = 'the 1-hour target' if sla_minutes == 60 else f'the {sla_minutes}-minute target'

    if sample_received_at is not None:
        delta_minutes = _ceil_minutes(sample_received_at - deadline)
        if sample_received_at <= deadline:
            if delta_minutes == 0:
                message = f'Sample received at clinic within {target}.'
            else:
                message = f'Sample received at clinic with {format_minutes_label(delta_minutes)} remaining.'
            return CollectionTrackingState(STATE_COMPLETE, message, minutes=delta_minutes, deadline=deadline)
        return CollectionTrackingState(
            STATE_COMPLETE_LATE,
            f'Sample received late, {format_minutes_label(delta_minutes)} after {target}.',
            minutes=delta_minutes,
            deadline=deadline,
        )

    if now <= deadline:
        remaining = max(1, _ceil_minutes(deadline - now))
        return CollectionTrackingState(
            STATE_PENDING,
            f'Driver contacted. {format_minutes_label(remaining)} remaining to receive the sample.',
            minutes=remaining,
            deadline=deadline,
        )

    overdue = max(1, _ceil_minutes(now - deadline))
    return CollectionTrackingState(
        STATE_OVERDUE,
        f'Collection overdue by {format_minutes_label(overdue)}. Contact the driver again.',
        is_overdue=True,
        minutes=overdue,
        deadline=deadline,
    )


def collection_state_for_order(order, now=None):
    return get_collection_tracking_state(
        order.request_collection,
        order.driver_collection_requested,
        order.driver_requested_at,
        order.sample_received_at,
        now or timezone.now(),
    )


def needs_live_refresh(order):
    """Orders whose banner can change with time alone."""
    return order.request_collection and order.sample_received_at is None


def toggle_driver_requested(order_id, checked, now=None, expected_version=None):
    """Record (or undo) that the driver was contacted for a pickup.

    Turning it on stamps the request time and keeps any receipt already
    recorded; turning it off clears both timestamps so tracking restarts.
    """
    now = now or timezone.now()
    if checked:
        order = save_order_edit(
            order_id,
            expected_version=expected_version,
            driver_collection_requested=True,
            driver_requested_at=now,
        )
    else:
        order = save_order_edit(
            order_id,
            expected_version=expected_version,
            driver_collection_requested=False,
            driver_requested_at=None,
            sample_received_at=None,
        )
    logger.info('Order %s driver requested set to %s', order.pk, checked)
    return order


@transaction.atomic
def mark_sample_received(order_id, now=None, expected_version=None):
    order = repository.get_order_for_update(order_id)
    if not order.driver_collection_requested:
        raise ValidationError('Request the driver before marking the sample as received.')
    if order.sample_received_at is not None:
        raise ValidationError('Sample receipt was already recorded for this order.')

    order = save_order_edit(order_id, expected_version=expected_version, sample_received_at=now or timezone.now())
    logger.info('Order %s sample received at %s', order.pk, order.sample_received_at)
    return order


def list_open_collections():
    return list(
        ExamOrder.objects.filter(
            request_collection=True,
            driver_collection_requested=True,
            sample_received_at__isnull=True,
        )
        .exclude(status=ExamOrder.STATUS_CANCELLED)
        .order_by('driver_requested_at')
    )


def list_overdue_collections(now=None):
    now = now or timezone.now()
    overdue = []
    for order in list_open_collections():
        state = collection_state_for_order(order, now)
        if state.is_overdue:
            overdue.append((order, state))
    return overdue
