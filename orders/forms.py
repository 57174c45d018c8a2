from django import forms

from accounts.validators import (
    format_international_phone,
    format_phone,
    format_ssn,
    validate_international_phone,
    validate_phone,
    validate_ssn,
)
from catalog.services import list_active_exams

from .models import ExamOrder
from .services.export import ALL, DEFAULT_RANGE, RANGE_LABELS

DATETIME_LOCAL_FORMATS = ['%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M']


def _required(label):
    return {'required': f'{label} is required.'}


class ExamOrderForm(forms.Form):
    """Order form a vet submits; exams are offered from the active catalog."""

    owner_name = forms.CharField(max_length=200, label='Name of Owner', error_messages=_required('Name of owner'))
    owner_ssn = forms.CharField(max_length=20, label='Social Security Number', error_messages=_required('Owner SSN'))
    owner_phone = forms.CharField(max_length=20, label='Phone', error_messages=_required('Owner phone'))
    owner_address = forms.CharField(max_length=300, required=False, label='Address')
    owner_email = forms.EmailField(required=False, label='Owner Email')

    patient_name = forms.CharField(max_length=100, label='Name of Animal', error_messages=_required('Name of animal'))
    species = forms.CharField(max_length=100, error_messages=_required('Species'))
    breed = forms.CharField(max_length=100, required=False)
    age_years = forms.DecimalField(
        min_value=0,
        max_digits=5,
        decimal_places=1,
        label='Age (years)',
        error_messages=_required('Age'),
    )
    weight_kg = forms.DecimalField(min_value=0, max_digits=6, decimal_places=2, required=False, label='Weight (kg)')
    neuter_status = forms.ChoiceField(
        choices=[('', 'Not informed')] + ExamOrder.NEUTER_CHOICES,
        required=False,
        label='Neutered',
    )
    reactive_status = forms.ChoiceField(
        choices=[('', 'Not informed')] + ExamOrder.REACTIVE_CHOICES,
        required=False,
        label='Reactive',
    )
    sex = forms.CharField(max_length=20, required=False)
    clinical_notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}))
    request_collection = forms.BooleanField(required=False, label='Request sample collection')

    exam_ids = forms.TypedMultipleChoiceField(
        coerce=int,
        required=False,
        widget=forms.CheckboxSelectMultiple,
        label='Exams',
    )

    def __init__(self, *args, catalog=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.catalog = list_active_exams() if catalog is None else catalog
        self.fields['exam_ids'].choices = [(exam.id, exam.name) for exam in self.catalog]

    def clean_owner_ssn(self):
        value = self.cleaned_data['owner_ssn']
        validate_ssn(value)
        return format_ssn(value)

    def clean_owner_phone(self):
        value = self.cleaned_data['owner_phone']
        validate_phone(value)
        return format_phone(value)

    def clean_exam_ids(self):
        exam_ids = self.cleaned_data['exam_ids']
        if not exam_ids:
            raise forms.ValidationError('Select at least one exam before sending the order.')
        return exam_ids


class AdminOrderUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=ExamOrder.STATUS_CHOICES)
    scheduled_for = forms.DateTimeField(
        required=False,
        input_formats=DATETIME_LOCAL_FORMATS,
        widget=forms.DateTimeInput(attrs={'type': 'datetime-local'}, format='%Y-%m-%dT%H:%M'),
    )
    admin_notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 2}))
    version = forms.IntegerField(required=False, widget=forms.HiddenInput())


class DriverCollectionForm(forms.Form):
    driver_collection_requested = forms.BooleanField(required=False)
    version = forms.IntegerField(required=False, widget=forms.HiddenInput())


class DriverPhoneForm(forms.Form):
    driver_phone = forms.CharField(
        max_length=25,
        label='Driver Phone Number',
        widget=forms.TextInput(attrs={'inputmode': 'numeric', 'placeholder': '+55 (11) 99999-9999'}),
        error_messages={'required': 'Driver phone must have 13 digits in the format +00 (00) 00000-0000.'},
    )

    def clean_driver_phone(self):
        value = self.cleaned_data['driver_phone']
        validate_international_phone(value)
        return format_international_phone(value)


class HistoryFilterForm(forms.Form):
    range = forms.ChoiceField(choices=list(RANGE_LABELS.items()), required=False, initial=DEFAULT_RANGE)
    vet = forms.CharField(required=False)
    clinic = forms.CharField(required=False)
    exam = forms.CharField(required=False)

    def filters(self):
        data = self.cleaned_data if self.is_valid() else {}
        return {
            'range_key': data.get('range') or DEFAULT_RANGE,
            'vet': data.get('vet') or ALL,
            'clinic': data.get('clinic') or ALL,
            'exam': data.get('exam') or ALL,
        }
