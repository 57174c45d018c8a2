"""Tests for document and phone validators and the order/registration forms."""

import pytest
from django.core.exceptions import ValidationError

from accounts.forms import VetRegistrationForm, first_form_error
from accounts.models import Profile
from accounts.validators import (
    format_international_phone,
    format_phone,
    format_ssn,
    to_digits_only,
    validate_international_phone,
    validate_phone,
    validate_ssn,
)
from orders.forms import DriverPhoneForm, ExamOrderForm, HistoryFilterForm


class TestValidators:
    def test_digits_only(self):
        assert to_digits_only('+55 (11) 9-8') == '551198'
        assert to_digits_only(None) == ''

    @pytest.mark.parametrize('value', ['12345678901', '123.456.789-01'])
    def test_ssn_accepts_eleven_digits(self, value):
        validate_ssn(value)

    @pytest.mark.parametrize('value', ['', '1234567890', '123456789012'])
    def test_ssn_rejects_other_lengths(self, value):
        with pytest.raises(ValidationError):
            validate_ssn(value)

    def test_phone_rejects_short_number(self):
        with pytest.raises(ValidationError):
            validate_phone('(11) 9876-543')

    def test_international_phone_message(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_international_phone('11987654321')
        assert excinfo.value.messages == ['Driver phone must have 13 digits in the format +00 (00) 00000-0000.']

    def test_formatters(self):
        assert format_ssn('12345678901') == '123.456.789-01'
        assert format_ssn('12345') == '123.45'
        assert format_phone('11987654321') == '(11) 98765-4321'
        assert format_international_phone('5511987654321') == '+55 (11) 98765-4321'
        assert format_international_phone('') == ''


def _order_form_data(catalog, **overrides):
    data = {
        'owner_name': 'Maria Silva',
        'owner_ssn': '11122233344',
        'owner_phone': '11912345678',
        'patient_name': 'Rex',
        'species': 'Dog',
        'age_years': '4.5',
        'exam_ids': [str(catalog[0].id)],
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestExamOrderForm:
    def test_valid_form_formats_documents(self, catalog):
        form = ExamOrderForm(_order_form_data(catalog), catalog=catalog)
        assert form.is_valid(), form.errors
        assert form.cleaned_data['owner_ssn'] == '111.222.333-44'
        assert form.cleaned_data['owner_phone'] == '(11) 91234-5678'
        assert form.cleaned_data['exam_ids'] == [catalog[0].id]
        assert form.cleaned_data['request_collection'] is False

    def test_requires_an_exam(self, catalog):
        form = ExamOrderForm(_order_form_data(catalog, exam_ids=[]), catalog=catalog)
        assert not form.is_valid()
        assert first_form_error(form) == 'Select at least one exam before sending the order.'

    def test_requires_owner_name(self, catalog):
        form = ExamOrderForm(_order_form_data(catalog, owner_name=''), catalog=catalog)
        assert not form.is_valid()
        assert first_form_error(form) == 'Name of owner is required.'

    def test_rejects_inactive_exam(self, catalog):
        active = catalog[1:]
        form = ExamOrderForm(_order_form_data(catalog), catalog=active)
        assert not form.is_valid()
        assert 'exam_ids' in form.errors

    def test_rejects_bad_ssn(self, catalog):
        form = ExamOrderForm(_order_form_data(catalog, owner_ssn='123'), catalog=catalog)
        assert not form.is_valid()
        assert 'owner_ssn' in form.errors


@pytest.mark.django_db
class TestVetRegistrationForm:
    def _data(self, **overrides):
        data = {
            'full_name': ' Ana Souza ',
            'crmv': 'SP-1',
            'ssn': '12345678901',
            'phone': '11987654321',
            'professional_type': Profile.TYPE_CLINIC,
            'clinic_name': 'Clinica Centro',
            'clinic_address': 'Rua A, 100',
        }
        data.update(overrides)
        return data

    def test_clinic_requires_name(self, new_vet):
        form = VetRegistrationForm(self._data(clinic_name=''), instance=new_vet.profile)
        assert not form.is_valid()
        assert first_form_error(form) == 'Please provide the clinic name.'

    def test_clinic_requires_address(self, new_vet):
        form = VetRegistrationForm(self._data(clinic_address=' '), instance=new_vet.profile)
        assert not form.is_valid()
        assert first_form_error(form) == 'Please provide the clinic address.'

    def test_independent_clears_clinic_fields(self, new_vet):
        form = VetRegistrationForm(
            self._data(professional_type=Profile.TYPE_INDEPENDENT),
            instance=new_vet.profile,
        )
        assert form.is_valid(), form.errors
        profile = form.save()
        assert profile.clinic_name == ''
        assert profile.clinic_address == ''
        assert profile.registration_completed is True
        assert profile.full_name == 'Ana Souza'
        assert profile.ssn == '123.456.789-01'


def test_driver_phone_form_formats_value():
    form = DriverPhoneForm({'driver_phone': '5511987654321'})
    assert form.is_valid()
    assert form.cleaned_data['driver_phone'] == '+55 (11) 98765-4321'


def test_history_filter_defaults():
    assert HistoryFilterForm(None).filters() == {
        'range_key': '3d',
        'vet': 'all',
        'clinic': 'all',
        'exam': 'all',
    }


def test_history_filter_ignores_unknown_range():
    form = HistoryFilterForm({'range': 'forever', 'vet': 'Ana Souza'})
    assert form.filters()['range_key'] == '3d'
