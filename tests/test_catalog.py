"""Tests for the exam catalog and FAQ services."""

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from catalog.models import ExamCatalogItem
from catalog.services import (
    DUPLICATE_EXAM_MESSAGE,
    DuplicateExamName,
    create_exam,
    create_faq_entry,
    group_exams_by_category,
    list_active_exams,
    list_active_faq_entries,
    set_exam_active,
    set_faq_entry_active,
    update_exam,
    update_exam_price,
)

pytestmark = pytest.mark.django_db


def test_create_exam_strips_text(catalog):
    exam = create_exam('  Cytology ', Decimal('60'), description=' Fine needle ', category=' ')
    assert exam.name == 'Cytology'
    assert exam.description == 'Fine needle'
    assert exam.display_category == 'Other Exams'
    assert exam.active is True


def test_duplicate_name_is_reported(catalog):
    with pytest.raises(DuplicateExamName) as excinfo:
        create_exam('Urinalysis', Decimal('10.00'))
    assert excinfo.value.messages == [DUPLICATE_EXAM_MESSAGE]
    assert ExamCatalogItem.objects.filter(name='Urinalysis').count() == 1


def test_rename_onto_existing_name_is_reported(catalog):
    with pytest.raises(DuplicateExamName):
        update_exam(catalog[0], name='Urinalysis')


def test_price_update_is_idempotent(catalog, monkeypatch):
    exam = catalog[0]
    first_save = datetime(2026, 3, 2, 9, 0, tzinfo=dt_timezone.utc)
    monkeypatch.setattr('django.utils.timezone.now', lambda: first_save)
    update_exam_price(exam, Decimal('95.00'))
    monkeypatch.setattr('django.utils.timezone.now', lambda: first_save + timedelta(minutes=5))
    update_exam_price(exam, Decimal('95.00'))

    assert ExamCatalogItem.objects.filter(name='Complete Blood Count').count() == 1
    exam.refresh_from_db()
    assert exam.current_price == Decimal('95.00')
    assert exam.updated_at == first_save + timedelta(minutes=5)


def test_inactive_exams_are_hidden(catalog):
    set_exam_active(catalog[1], False)
    assert [exam.name for exam in list_active_exams()] == ['Biochemistry Panel', 'Complete Blood Count']


def test_group_by_category(catalog):
    grouped = group_exams_by_category(list_active_exams())
    assert [(category, [exam.name for exam in exams]) for category, exams in grouped] == [
        ('Hematology', ['Complete Blood Count']),
        ('Other Exams', ['Biochemistry Panel']),
        ('Urine', ['Urinalysis']),
    ]


def test_faq_visibility():
    first = create_faq_entry(' How long do results take? ', ' Usually 48 hours. ')
    second = create_faq_entry('Do you collect at home?', 'Only at clinics.', category='Collection')
    set_faq_entry_active(first, False)

    visible = list_active_faq_entries()
    assert visible == [second]
    assert first.question == 'How long do results take?'
    assert first.display_category == 'General'
