from dataclasses import dataclass

from django.conf import settings
from django.db import models


@dataclass(frozen=True)
class ClinicPractice:
    """A vet working out of a named clinic."""

    name: str
    address: str

    kind = "clinic"

    @property
    def display_name(self):
        return self.name


@dataclass(frozen=True)
class IndependentPractice:
    """A vet working on their own, with no clinic fields."""

    kind = "independent"
    display_name = "Independent Professional"


def _has_value(value):
    return bool(value and value.strip())


class Profile(models.Model):
    ROLE_VET = "vet_user"
    ROLE_ADMIN = "admin_user"
    ROLE_CHOICES = [
        (ROLE_VET, "Veterinarian"),
        (ROLE_ADMIN, "Administrator"),
    ]

    TYPE_CLINIC = "clinic"
    TYPE_INDEPENDENT = "independent"
    PROFESSIONAL_TYPE_CHOICES = [
        (TYPE_CLINIC, "Clinic"),
        (TYPE_INDEPENDENT, "Independent Professional"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_VET)

    full_name = models.CharField(max_length=200, blank=True)
    crmv = models.CharField(max_length=40, blank=True, verbose_name="CRMV")
    ssn = models.CharField(max_length=20, blank=True, verbose_name="SSN")
    phone = models.CharField(max_length=20, blank=True)
    professional_type = models.CharField(max_length=20, choices=PROFESSIONAL_TYPE_CHOICES, blank=True)
    clinic_name = models.CharField(max_length=200, blank=True)
    clinic_address = models.CharField(max_length=300, blank=True)
    registration_completed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name"]

    def __str__(self):
        return f"{self.full_name or self.user.get_username()} ({self.get_role_display()})"

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def is_vet(self):
        return self.role == self.ROLE_VET

    @property
    def practice(self):
        if self.professional_type == self.TYPE_CLINIC:
            return ClinicPractice(name=self.clinic_name.strip(), address=self.clinic_address.strip())
        if self.professional_type == self.TYPE_INDEPENDENT:
            return IndependentPractice()
        return None

    def is_registration_complete(self):
        if self.role != self.ROLE_VET:
            return True
        if self.registration_completed:
            return True

        has_basics = (
            _has_value(self.full_name)
            and _has_value(self.crmv)
            and _has_value(self.ssn)
            and _has_value(self.phone)
            and bool(self.professional_type)
        )
        if not has_basics:
            return False

        # Older profiles were completed before the clinic address existed.
        if self.professional_type == self.TYPE_CLINIC:
            return _has_value(self.clinic_name)
        return True
