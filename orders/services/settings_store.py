import logging

from accounts.validators import format_international_phone, to_digits_only, validate_international_phone
from orders.models import AppSetting

logger = logging.getLogger(__name__)

DRIVER_PHONE_KEY = AppSetting.DRIVER_PHONE


def get_setting(key, default=None):
    setting = AppSetting.objects.filter(key=key).first()
    if setting is None:
        return default
    return setting.value


def upsert_setting(key, value):
    setting, created = AppSetting.objects.update_or_create(key=key, defaults={'value': value})
    logger.info('Setting %s %s', key, 'created' if created else 'updated')
    return setting


def get_driver_phone():
    return get_setting(DRIVER_PHONE_KEY)


def has_valid_driver_phone(value):
    return len(to_digits_only(value)) == 13


def save_driver_phone(value):
    validate_international_phone(value)
    return upsert_setting(DRIVER_PHONE_KEY, format_international_phone(value))
