import logging
from decimal import Decimal
from urllib.parse import quote

from django.conf import settings

from accounts.models import Profile
from accounts.validators import to_digits_only

logger = logging.getLogger(__name__)

NOT_INFORMED = 'Not informed'
# Characters encodeURIComponent leaves as-is, so links match the ones sent before.
URI_COMPONENT_SAFE = "!*'()"


def _format_age(age_years):
    if age_years is None:
        return None
    return f"{Decimal(str(age_years)).normalize():f}"


def _clinic_heading(order):
    name = (order.vet_clinic_name or '').strip()
    if name:
        return name
    if order.vet_professional_type == Profile.TYPE_INDEPENDENT:
        return 'Independent Professional'
    return 'Clinic not informed'


def build_driver_message(order):
    exam_list = ', '.join(line.exam_name for line in order.exam_lines)
    clinic_address = (order.vet_clinic_address or '').strip()
    age = _format_age(order.age_years)
    patient_info = ' | '.join(
        part
        for part in [
            order.patient_name,
            f'Species: {order.species}' if order.species else None,
            f'Breed: {order.breed}' if order.breed else None,
            f'Age: {age}' if age is not None else None,
        ]
        if part
    )

    lines = [
        f'CVDE Collection Request - Order #{order.pk}',
        f'*{_clinic_heading(order).upper()}*',
        f'Address: {clinic_address}' if clinic_address else None,
        '',
        f'Vet: {order.vet_name_snapshot or NOT_INFORMED}',
        f'Vet email: {order.vet_email_snapshot or NOT_INFORMED}',
        f'Owner: {order.owner_name}',
        f'Owner phone: {order.owner_phone or NOT_INFORMED}',
        f'Patient: {patient_info}',
        f'Exams: {exam_list or NOT_INFORMED}',
        '',
        'Please collect the sample at the requesting clinic.',
    ]
    return '\n'.join(line for line in lines if line is not None)


def build_driver_reminder_message(order):
    return '\n'.join(
        [
            f'CVDE Reminder - Order #{order.pk}',
            'This collection is overdue.',
            f'Patient: {order.patient_name}',
            f'Owner: {order.owner_name}',
            'Please send an update and prioritize delivery to the clinic.',
        ]
    )


def build_whatsapp_url(phone, message):
    base_url = getattr(settings, 'CVDE_WHATSAPP_BASE_URL', 'https://wa.me').rstrip('/')
    text = quote(message, safe=URI_COMPONENT_SAFE)
    return f'{base_url}/{to_digits_only(phone)}?text={text}'


def build_driver_whatsapp_url(driver_phone, order):
    return build_whatsapp_url(driver_phone, build_driver_message(order))


def build_driver_reminder_whatsapp_url(driver_phone, order):
    return build_whatsapp_url(driver_phone, build_driver_reminder_message(order))


def announce_new_order(order, created):
    """Change feed subscriber that tells the admin log about incoming orders."""
    if not created:
        return
    logger.info(
        'New exam order %s from %s%s',
        order.pk,
        order.vet_name_snapshot or f'user {order.vet_id}',
        ', sample collection requested' if order.request_collection else '',
    )
