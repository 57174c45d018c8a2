from django import forms
from django.core.exceptions import ValidationError

from .models import Profile
from .validators import format_phone, format_ssn, validate_phone, validate_ssn


class VetRegistrationForm(forms.ModelForm):
    """Professional profile a vet fills in once before ordering exams.

    The same form backs later edits from the profile page; saving it always
    marks the registration as completed.
    """

    class Meta:
        model = Profile
        fields = [
            "full_name",
            "crmv",
            "ssn",
            "phone",
            "professional_type",
            "clinic_name",
            "clinic_address",
        ]
        labels = {
            "full_name": "Full Name",
            "crmv": "CRMV",
            "ssn": "Social Security Number",
        }
        widgets = {
            "ssn": forms.TextInput(attrs={"inputmode": "numeric", "placeholder": "000.000.000-00"}),
            "phone": forms.TextInput(attrs={"inputmode": "numeric", "placeholder": "(00) 00000-0000"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ("full_name", "crmv", "ssn", "phone", "professional_type"):
            self.fields[name].required = True
        self.fields["professional_type"].choices = [("", "Select...")] + Profile.PROFESSIONAL_TYPE_CHOICES

    def clean_full_name(self):
        return self.cleaned_data["full_name"].strip()

    def clean_crmv(self):
        return self.cleaned_data["crmv"].strip()

    def clean_ssn(self):
        value = self.cleaned_data["ssn"]
        validate_ssn(value)
        return format_ssn(value)

    def clean_phone(self):
        value = self.cleaned_data["phone"]
        validate_phone(value)
        return format_phone(value)

    def clean(self):
        cleaned = super().clean()
        professional_type = cleaned.get("professional_type")
        clinic_name = (cleaned.get("clinic_name") or "").strip()
        clinic_address = (cleaned.get("clinic_address") or "").strip()

        if professional_type == Profile.TYPE_CLINIC:
            if not clinic_name:
                raise ValidationError("Please provide the clinic name.")
            if not clinic_address:
                raise ValidationError("Please provide the clinic address.")
            cleaned["clinic_name"] = clinic_name
            cleaned["clinic_address"] = clinic_address
        else:
            cleaned["clinic_name"] = ""
            cleaned["clinic_address"] = ""
        return cleaned

    def save(self, commit=True):
        profile = super().save(commit=False)
        profile.registration_completed = True
        if commit:
            profile.save()
        return profile


def first_form_error(form, default="Please review the highlighted fields."):
    """Collapse a bound form's errors into the single message shown to the user."""
    for errors in form.errors.get_json_data().values():
        for err in errors:
            return err["message"]
    return default
