from django.conf import settings
from django.db import models

from accounts.models import Profile

INDEPENDENT_LABEL = 'Independent Professional'
CLINIC_NOT_INFORMED = 'Clinic not informed'


class ExamOrder(models.Model):
    STATUS_REQUESTED = 'requested'
    STATUS_SCHEDULED = 'scheduled'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_REQUESTED, 'Requested'),
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    NEUTER_NEUTERED = 'neutered'
    NEUTER_NOT_NEUTERED = 'not_neutered'
    NEUTER_UNKNOWN = 'unknown'
    NEUTER_CHOICES = [
        (NEUTER_NEUTERED, 'Neutered'),
        (NEUTER_NOT_NEUTERED, 'Not neutered'),
        (NEUTER_UNKNOWN, 'Unknown'),
    ]

    REACTIVE_REACTIVE = 'reactive'
    REACTIVE_NOT_REACTIVE = 'not_reactive'
    REACTIVE_CHOICES = [
        (REACTIVE_REACTIVE, 'Reactive'),
        (REACTIVE_NOT_REACTIVE, 'Not reactive'),
    ]

    vet = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='exam_orders')
    vet_name_snapshot = models.CharField(max_length=200, blank=True)
    vet_email_snapshot = models.CharField(max_length=254, blank=True)
    vet_crmv_snapshot = models.CharField(max_length=40, blank=True)
    vet_clinic_name = models.CharField(max_length=200, blank=True)
    vet_clinic_address = models.CharField(max_length=300, blank=True)
    vet_professional_type = models.CharField(max_length=20, choices=Profile.PROFESSIONAL_TYPE_CHOICES, blank=True)

    owner_name = models.CharField(max_length=200)
    owner_ssn = models.CharField(max_length=20, verbose_name='Owner SSN')
    owner_phone = models.CharField(max_length=20)
    owner_address = models.CharField(max_length=300, blank=True)
    owner_email = models.EmailField(blank=True)

    patient_name = models.CharField(max_length=100)
    species = models.CharField(max_length=100)
    breed = models.CharField(max_length=100, blank=True)
    age_years = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    weight_kg = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    neuter_status = models.CharField(max_length=20, choices=NEUTER_CHOICES, blank=True)
    reactive_status = models.CharField(max_length=20, choices=REACTIVE_CHOICES, blank=True)
    sex = models.CharField(max_length=20, blank=True)
    clinical_notes = models.TextField(blank=True)

    selected_exams = models.JSONField(default=list)
    total_value = models.DecimalField(max_digits=10, decimal_places=2)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_REQUESTED, db_index=True)
    scheduled_for = models.DateTimeField(null=True, blank=True)
    admin_notes = models.TextField(blank=True)

    request_collection = models.BooleanField(default=False)
    driver_collection_requested = models.BooleanField(default=False)
    driver_requested_at = models.DateTimeField(null=True, blank=True)
    sample_received_at = models.DateTimeField(null=True, blank=True)

    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['vet', 'created_at'], name='orders_exam_vet_id_3f1c2a_idx'),
            models.Index(fields=['request_collection', 'sample_received_at'], name='orders_exam_request_8b7e4d_idx'),
        ]

    def __str__(self):
        return f'Order #{self.pk} - {self.patient_name}'

    @property
    def exam_lines(self):
        from orders.services.pricing import parse_selected_exams

        return parse_selected_exams(self.selected_exams)

    @property
    def exam_names(self):
        return ', '.join(line.exam_name for line in self.exam_lines)

    def _current_vet_profile(self):
        try:
            return self.vet.profile
        except Profile.DoesNotExist:
            return None

    @property
    def display_vet_name(self):
        if self.vet_name_snapshot:
            return self.vet_name_snapshot
        profile = self._current_vet_profile()
        if profile and profile.full_name:
            return profile.full_name
        return 'Unknown'

    @property
    def display_vet_crmv(self):
        if self.vet_crmv_snapshot:
            return self.vet_crmv_snapshot
        profile = self._current_vet_profile()
        return profile.crmv if profile else ''

    @property
    def display_clinic_name(self):
        if self.vet_clinic_name:
            return self.vet_clinic_name
        professional_type = self.vet_professional_type
        profile = self._current_vet_profile()
        if profile is not None and not professional_type:
            practice = profile.practice
            if practice is not None:
                return practice.display_name or CLINIC_NOT_INFORMED
        if professional_type == Profile.TYPE_INDEPENDENT:
            return INDEPENDENT_LABEL
        return CLINIC_NOT_INFORMED

    @property
    def display_clinic_address(self):
        if self.vet_clinic_address:
            return self.vet_clinic_address
        if self.vet_professional_type:
            return ''
        profile = self._current_vet_profile()
        practice = profile.practice if profile else None
        return getattr(practice, 'address', '')


class AppSetting(models.Model):
    DRIVER_PHONE = 'driver_phone'

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['key']

    def __str__(self):
        return self.key
