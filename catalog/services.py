import logging
from itertools import groupby

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from .models import ExamCatalogItem, FaqEntry

logger = logging.getLogger(__name__)

DUPLICATE_EXAM_MESSAGE = 'An exam with this name already exists.'
_DUPLICATE_MARKERS = ('duplicate key', 'unique constraint')


class DuplicateExamName(ValidationError):
    def __init__(self):
        super().__init__(DUPLICATE_EXAM_MESSAGE, code='duplicate_name')


def _is_duplicate_name_error(exc):
    text = str(exc).lower()
    return any(marker in text for marker in _DUPLICATE_MARKERS)


def _save_exam(exam, update_fields=None):
    try:
        with transaction.atomic():
            exam.save(update_fields=update_fields)
    except IntegrityError as exc:
        if _is_duplicate_name_error(exc):
            raise DuplicateExamName() from exc
        logger.exception('Failed saving exam %s', exam.pk)
        raise ValidationError(str(exc)) from exc
    return exam


def list_active_exams():
    return list(ExamCatalogItem.objects.filter(active=True).order_by('name'))


def list_all_exams():
    return list(ExamCatalogItem.objects.order_by('name'))


def group_exams_by_category(exams):
    """Return [(category, [exams...]), ...] sorted by category, then exam name."""
    ordered = sorted(exams, key=lambda exam: (exam.display_category, exam.name))
    return [(category, list(items)) for category, items in groupby(ordered, key=lambda exam: exam.display_category)]


def create_exam(name, price, description='', category=''):
    exam = ExamCatalogItem(
        name=name.strip(),
        description=(description or '').strip(),
        category=(category or '').strip(),
        current_price=price,
        active=True,
    )
    _save_exam(exam)
    logger.info('Created exam %s (%s) at %s', exam.pk, exam.name, exam.current_price)
    return exam


def update_exam(exam, *, name, description='', category='', active=None):
    exam.name = name.strip()
    exam.description = (description or '').strip()
    exam.category = (category or '').strip()
    fields = ['name', 'description', 'category', 'updated_at']
    if active is not None:
        exam.active = active
        fields.append('active')
    return _save_exam(exam, update_fields=fields)


def update_exam_price(exam, price):
    exam.current_price = price
    _save_exam(exam, update_fields=['current_price', 'updated_at'])
    logger.info('Exam %s price set to %s', exam.pk, price)
    return exam


def set_exam_active(exam, active):
    exam.active = active
    return _save_exam(exam, update_fields=['active', 'updated_at'])


def list_active_faq_entries():
    return list(FaqEntry.objects.filter(active=True).order_by('-id'))


def list_all_faq_entries():
    return list(FaqEntry.objects.order_by('-id'))


def create_faq_entry(question, answer, category=''):
    return FaqEntry.objects.create(
        question=question.strip(),
        answer=answer.strip(),
        category=(category or '').strip(),
    )


def set_faq_entry_active(entry, active):
    entry.active = active
    entry.save(update_fields=['active', 'updated_at'])
    return entry
