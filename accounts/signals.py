import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def _create_profile_for_new_user(sender, instance, created, **kwargs):
    if not created:
        return

    role = Profile.ROLE_ADMIN if instance.is_superuser else Profile.ROLE_VET
    Profile.objects.get_or_create(user=instance, defaults={"role": role})
    logger.info("Created %s profile for user %s", role, instance.pk)
