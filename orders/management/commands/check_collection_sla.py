from django.core.management.base import BaseCommand
from django.utils import timezone

from orders.services.collection import list_open_collections, list_overdue_collections
from orders.services.notifications import build_driver_reminder_whatsapp_url
from orders.services.settings_store import get_driver_phone, has_valid_driver_phone


class Command(BaseCommand):
    help = 'Report sample collections past the pickup target, with a driver reminder link for each.'

    def handle(self, *args, **options):
        now = timezone.now()
        open_count = len(list_open_collections())
        overdue = list_overdue_collections(now)

        driver_phone = get_driver_phone()
        valid_phone = has_valid_driver_phone(driver_phone)
        if overdue and not valid_phone:
            self.stdout.write(self.style.WARNING('Driver phone is not configured; reminder links are unavailable.'))

        for order, state in overdue:
            self.stdout.write(self.style.ERROR(f'Order {order.id} ({order.patient_name}): {state.message}'))
            if valid_phone:
                self.stdout.write(f'  {build_driver_reminder_whatsapp_url(driver_phone, order)}')

        self.stdout.write(
            self.style.SUCCESS(f'{open_count} open collection(s), {len(overdue)} overdue.')
        )
