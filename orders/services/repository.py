import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from accounts.decorators import ADMIN_ROLE, get_profile, user_has_role
from catalog.services import list_active_exams
from orders.models import ExamOrder
from orders.services.pricing import price_selection

logger = logging.getLogger(__name__)

STALE_VERSION_MESSAGE = 'This order was changed by someone else. Reload the page and try again.'

# Fields an administrator may change after the vet has submitted the order.
ADMIN_EDITABLE_FIELDS = (
    'status',
    'scheduled_for',
    'admin_notes',
    'driver_collection_requested',
    'driver_requested_at',
    'sample_received_at',
)

DRAFT_FIELDS = (
    'owner_name',
    'owner_ssn',
    'owner_phone',
    'owner_address',
    'owner_email',
    'patient_name',
    'species',
    'breed',
    'age_years',
    'weight_kg',
    'neuter_status',
    'reactive_status',
    'sex',
    'clinical_notes',
    'request_collection',
)


def _vet_snapshot(user, profile):
    practice = profile.practice
    return {
        'vet_name_snapshot': profile.full_name,
        'vet_email_snapshot': user.email or '',
        'vet_crmv_snapshot': profile.crmv,
        'vet_professional_type': practice.kind if practice else '',
        'vet_clinic_name': practice.name if practice and practice.kind == 'clinic' else '',
        'vet_clinic_address': practice.address if practice and practice.kind == 'clinic' else '',
    }


def create_order(vet, draft, catalog=None):
    """Persist a vet's order.

    ``draft`` holds the cleaned form values plus ``exam_ids``. Prices and the
    total are taken from the active catalog, never from the submitted data.
    """
    profile = get_profile(vet)
    if profile is None or not profile.is_registration_complete():
        raise ValidationError('Please complete your registration before ordering exams.')

    catalog = list_active_exams() if catalog is None else catalog
    priced = price_selection(catalog, draft.get('exam_ids') or [])
    if not priced:
        raise ValidationError('Select at least one exam before sending the order.')

    fields = {name: draft[name] for name in DRAFT_FIELDS if name in draft}
    order = ExamOrder.objects.create(
        vet=vet,
        **_vet_snapshot(vet, profile),
        **fields,
        selected_exams=[line.as_dict() for line in priced.lines],
        total_value=priced.total,
        status=ExamOrder.STATUS_REQUESTED,
        driver_collection_requested=False,
        driver_requested_at=None,
        sample_received_at=None,
    )
    logger.info(
        'Vet %s created order %s with %s exam(s), total %s, collection=%s',
        vet.pk,
        order.pk,
        len(priced.lines),
        priced.total,
        order.request_collection,
    )
    return order


def list_orders(user):
    """Orders visible to ``user``: all of them for admins, their own for vets."""
    qs = ExamOrder.objects.select_related('vet', 'vet__profile').order_by('-created_at', '-id')
    if user_has_role(user, ADMIN_ROLE):
        return list(qs)
    return list(qs.filter(vet=user))


def get_order_for_update(order_id):
    try:
        return ExamOrder.objects.select_for_update().get(pk=order_id)
    except ExamOrder.DoesNotExist as exc:
        raise ValidationError(f'Order #{order_id} does not exist.') from exc


def check_version(order, expected_version):
    if expected_version is not None and int(expected_version) != order.version:
        logger.warning(
            'Rejected stale update for order %s (expected version %s, current %s)',
            order.pk,
            expected_version,
            order.version,
        )
        raise ValidationError(STALE_VERSION_MESSAGE, code='stale')


def apply_update(order, fields):
    unknown = set(fields) - set(ADMIN_EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f'Fields cannot be changed: {", ".join(sorted(unknown))}.')

    for name, value in fields.items():
        setattr(order, name, value)

    if not order.driver_collection_requested:
        order.driver_requested_at = None
        order.sample_received_at = None

    order.version += 1
    order.save(update_fields=[*ADMIN_EDITABLE_FIELDS, 'version', 'updated_at'])
    return order


@transaction.atomic
def update_order(order_id, fields, expected_version=None):
    order = get_order_for_update(order_id)
    check_version(order, expected_version)
    return apply_update(order, fields)
