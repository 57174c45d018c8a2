from django import template

from accounts.validators import format_international_phone, format_phone, format_ssn
from orders.formatting import format_currency, format_datetime
from orders.services.collection import collection_state_for_order

register = template.Library()


@register.filter
def currency(value):
    return format_currency(value)


@register.filter
def datetime_display(value):
    return format_datetime(value)


@register.filter
def collection_state(order):
    """Derived collection state for an order, evaluated at render time."""
    return collection_state_for_order(order)


@register.filter
def ssn(value):
    return format_ssn(value) if value else ''


@register.filter
def phone(value):
    return format_phone(value) if value else ''


@register.filter
def international_phone(value):
    return format_international_phone(value) if value else ''
