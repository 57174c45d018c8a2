"""Status changes and the administrator's edit bundle for an order.

Status is set directly from a dropdown. Completed and cancelled are reported
as terminal but not enforced, so an administrator can still move an order
back if needed.
"""
import logging
from dataclasses import dataclass, replace
from datetime import datetime

from django.core.exceptions import ValidationError
from django.db import transaction

from orders.models import ExamOrder
from orders.services import repository

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({ExamOrder.STATUS_COMPLETED, ExamOrder.STATUS_CANCELLED})
VALID_STATUSES = frozenset(value for value, _ in ExamOrder.STATUS_CHOICES)


def is_terminal(status):
    return status in TERMINAL_STATUSES


@dataclass(frozen=True)
class OrderEdit:
    status: str
    scheduled_for: datetime | None
    admin_notes: str
    driver_collection_requested: bool
    driver_requested_at: datetime | None
    sample_received_at: datetime | None

    @classmethod
    def from_order(cls, order):
        return cls(
            status=order.status,
            scheduled_for=order.scheduled_for,
            admin_notes=order.admin_notes,
            driver_collection_requested=order.driver_collection_requested,
            driver_requested_at=order.driver_requested_at,
            sample_received_at=order.sample_received_at,
        )

    def merged(self, **overrides):
        return replace(self, **overrides)

    def as_fields(self):
        return {
            'status': self.status,
            'scheduled_for': self.scheduled_for,
            'admin_notes': (self.admin_notes or '').strip(),
            'driver_collection_requested': self.driver_collection_requested,
            'driver_requested_at': self.driver_requested_at,
            'sample_received_at': self.sample_received_at,
        }


@transaction.atomic
def save_order_edit(order_id, expected_version=None, **overrides):
    """Apply ``overrides`` on top of the order's latest persisted state.

    Every field not overridden keeps its current stored value, so saving the
    status never drops a collection timestamp recorded in the meantime.
    """
    order = repository.get_order_for_update(order_id)
    repository.check_version(order, expected_version)

    edit = OrderEdit.from_order(order).merged(**overrides)
    if edit.status not in VALID_STATUSES:
        raise ValidationError(f'Unknown order status: {edit.status}.')

    order = repository.apply_update(order, edit.as_fields())
    logger.debug('Saved edit bundle for order %s (version %s)', order.pk, order.version)
    return order


_UNSET = object()


def update_order_status(order_id, status, scheduled_for=_UNSET, admin_notes=_UNSET, expected_version=None):
    """Set the status, and the schedule or notes only when they are passed."""
    overrides = {'status': status}
    if scheduled_for is not _UNSET:
        overrides['scheduled_for'] = scheduled_for
    if admin_notes is not _UNSET:
        overrides['admin_notes'] = admin_notes
    return save_order_edit(order_id, expected_version=expected_version, **overrides)
