import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from orders.models import ExamOrder
from orders.services import change_feed

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=ExamOrder)
def cache_previous_status(sender, instance, **kwargs):
    if not instance.pk:
        instance._previous_status = None
        return
    instance._previous_status = (
        ExamOrder.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    )


@receiver(post_save, sender=ExamOrder)
def publish_order_change(sender, instance, created, **kwargs):
    previous = getattr(instance, '_previous_status', None)
    if not created and previous and previous != instance.status:
        logger.info('Order %s moved from %s to %s', instance.pk, previous, instance.status)
    change_feed.publish(instance, created=created)
