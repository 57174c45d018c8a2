from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

CENTS = Decimal('0.01')


@dataclass(frozen=True)
class SelectedExam:
    exam_id: int
    exam_name: str
    unit_price: Decimal

    @property
    def line_total(self):
        return self.unit_price

    def as_dict(self):
        return {
            'exam_id': self.exam_id,
            'exam_name': self.exam_name,
            'unit_price': str(self.unit_price),
        }


@dataclass(frozen=True)
class PricedSelection:
    lines: list
    total: Decimal

    def __bool__(self):
        return bool(self.lines)


def toggle_exam(selection, exam_id, checked):
    """Return a new selection map with exam_id checked or removed."""
    next_selection = dict(selection)
    if checked:
        next_selection[exam_id] = True
    else:
        next_selection.pop(exam_id, None)
    return next_selection


def compute_total(lines):
    return sum((line.line_total for line in lines), Decimal('0')).quantize(CENTS)


def price_selection(catalog, selection):
    """Price the selected exams against a catalog snapshot.

    ``selection`` is a mapping of exam id to a truthy flag, or any iterable of
    exam ids. Lines follow catalog order and use the catalog's current price;
    ids missing from the catalog are ignored.
    """
    if not hasattr(selection, 'get'):
        selection = {exam_id: True for exam_id in selection}

    lines = [
        SelectedExam(
            exam_id=exam.id,
            exam_name=exam.name,
            unit_price=Decimal(str(exam.current_price)).quantize(CENTS),
        )
        for exam in catalog
        if selection.get(exam.id)
    ]
    return PricedSelection(lines=lines, total=compute_total(lines))


def _parse_price(value):
    if isinstance(value, bool) or value is None:
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite() or price < 0:
        return None
    return price.quantize(CENTS)


def parse_selected_exams(value):
    """Read stored order lines back, dropping anything malformed.

    Older rows also carry ``quantity`` and ``line_total``; those keys are
    ignored and each row is read as a single line.
    """
    if not isinstance(value, list):
        return []

    lines = []
    for item in value:
        if not isinstance(item, dict):
            continue
        if not {'exam_id', 'exam_name', 'unit_price'} <= item.keys():
            continue
        exam_id, exam_name = item['exam_id'], item['exam_name']
        if isinstance(exam_id, bool) or not isinstance(exam_id, int):
            continue
        if not isinstance(exam_name, str) or not exam_name.strip():
            continue
        unit_price = _parse_price(item['unit_price'])
        if unit_price is None:
            continue
        lines.append(SelectedExam(exam_id=exam_id, exam_name=exam_name, unit_price=unit_price))
    return lines
