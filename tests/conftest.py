from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from accounts.models import Profile
from catalog.services import create_exam
from orders.services.repository import create_order


@pytest.fixture
def make_user(db):
    def _make_user(username, *, email=None, superuser=False, **profile_fields):
        User = get_user_model()
        factory = User.objects.create_superuser if superuser else User.objects.create_user
        user = factory(username=username, email=email or f'{username}@example.com', password='secret-pass')
        if profile_fields:
            Profile.objects.filter(user=user).update(**profile_fields)
            user.refresh_from_db()
        return user

    return _make_user


@pytest.fixture
def vet_user(make_user):
    return make_user(
        'ana',
        full_name='Ana Souza',
        crmv='SP-12345',
        ssn='123.456.789-01',
        phone='(11) 98765-4321',
        professional_type=Profile.TYPE_CLINIC,
        clinic_name='Clinica Centro',
        clinic_address='Rua A, 100',
        registration_completed=True,
    )


@pytest.fixture
def independent_vet(make_user):
    return make_user(
        'bruno',
        full_name='Bruno Lima',
        crmv='RJ-999',
        ssn='98765432100',
        phone='21987654321',
        professional_type=Profile.TYPE_INDEPENDENT,
        registration_completed=True,
    )


@pytest.fixture
def new_vet(make_user):
    """A vet who has not filled in the registration form yet."""
    return make_user('carla')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin', role=Profile.ROLE_ADMIN)


@pytest.fixture
def catalog(db):
    return [
        create_exam('Complete Blood Count', Decimal('80.00'), category='Hematology'),
        create_exam('Urinalysis', Decimal('45.50'), category='Urine'),
        create_exam('Biochemistry Panel', Decimal('120.00')),
    ]


@pytest.fixture
def order_draft(catalog):
    return {
        'owner_name': 'Maria Silva',
        'owner_ssn': '111.222.333-44',
        'owner_phone': '(11) 91234-5678',
        'owner_address': 'Rua B, 200',
        'owner_email': 'maria@example.com',
        'patient_name': 'Rex',
        'species': 'Dog',
        'breed': 'Labrador',
        'age_years': Decimal('4.5'),
        'weight_kg': Decimal('30.20'),
        'neuter_status': 'neutered',
        'reactive_status': '',
        'sex': 'Male',
        'clinical_notes': '',
        'request_collection': True,
        'exam_ids': [catalog[0].id, catalog[1].id],
    }


@pytest.fixture
def order(vet_user, order_draft):
    return create_order(vet_user, order_draft)
