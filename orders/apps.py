from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Exam Orders"

    def ready(self):
        from . import signals  # noqa: F401
        from .services import change_feed
        from .services.notifications import announce_new_order

        change_feed.subscribe(announce_new_order)
