import re
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone


def format_currency(value):
    """US dollar amount with thousands separators, e.g. ``$1,234.50``."""
    amount = Decimal(str(value or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    sign = '-' if amount < 0 else ''
    return f'{sign}${abs(amount):,.2f}'


def format_datetime(value):
    """Month/day/year, 12-hour clock in the active time zone; ``-`` when empty."""
    if not value:
        return '-'
    local = timezone.localtime(value) if timezone.is_aware(value) else value
    hour = local.hour % 12 or 12
    meridiem = 'AM' if local.hour < 12 else 'PM'
    return f'{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {meridiem}'


def to_datetime_local_value(value):
    if not value:
        return ''
    return timezone.localtime(value).strftime('%Y-%m-%dT%H:%M')


def format_doctor_name(full_name):
    base_name = (full_name or '').strip() or 'Doctor'
    return base_name if re.match(r'^dr\.?', base_name, re.IGNORECASE) else f'Dr. {base_name}'
