from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from accounts.models import Profile


class Command(BaseCommand):
    help = "Assign a portal role (vet_user or admin_user) to an existing user."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("role", choices=[value for value, _ in Profile.ROLE_CHOICES])

    def handle(self, *args, **options):
        User = get_user_model()
        try:
            user = User.objects.get(**{User.USERNAME_FIELD: options["username"]})
        except User.DoesNotExist as exc:
            raise CommandError(f"User {options['username']} does not exist.") from exc

        profile, created = Profile.objects.get_or_create(user=user, defaults={"role": options["role"]})
        if not created:
            profile.role = options["role"]
            profile.save(update_fields=["role", "updated_at"])
        status = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"{user}: {options['role']} ({status})"))
