from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from django.utils import timezone

from orders.formatting import format_currency, format_datetime

RANGE_DAYS = {
    '3d': 3,
    '7d': 7,
    '30d': 30,
    '90d': 90,
    '365d': 365,
    'all': None,
}
RANGE_LABELS = {
    '3d': 'Last 3 days',
    '7d': 'Last 7 days',
    '30d': 'Last 30 days',
    '90d': 'Last 90 days',
    '365d': 'Last 12 months',
    'all': 'All time',
}
DEFAULT_RANGE = '3d'
ALL = 'all'

CSV_BOM = '\ufeff'
CSV_LINE_END = '\r\n'


@dataclass(frozen=True)
class HistoryRow:
    row_id: str
    order_id: int
    exam_name: str
    exam_value: Decimal
    vet_name: str
    clinic_name: str
    created_at: datetime


def build_history_rows(orders):
    """One row per exam line, newest orders first."""
    rows = [
        HistoryRow(
            row_id=f'{order.pk}-{line.exam_id}-{index}',
            order_id=order.pk,
            exam_name=line.exam_name,
            exam_value=line.unit_price,
            vet_name=order.display_vet_name,
            clinic_name=order.display_clinic_name,
            created_at=order.created_at,
        )
        for order in orders
        for index, line in enumerate(order.exam_lines)
    ]
    rows.sort(key=lambda row: row.created_at, reverse=True)
    return rows


def get_range_start(range_key, now=None):
    days = RANGE_DAYS.get(range_key)
    if days is None:
        return None
    return (now or timezone.now()) - timedelta(days=days)


def filter_history_rows(rows, range_key=DEFAULT_RANGE, vet=ALL, clinic=ALL, exam=ALL, now=None):
    range_start = get_range_start(range_key, now)
    return [
        row
        for row in rows
        if (range_start is None or row.created_at >= range_start)
        and (vet == ALL or row.vet_name == vet)
        and (clinic == ALL or row.clinic_name == clinic)
        and (exam == ALL or row.exam_name == exam)
    ]


def history_filter_options(rows):
    return {
        'vets': sorted({row.vet_name for row in rows}),
        'clinics': sorted({row.clinic_name for row in rows}),
        'exams': sorted({row.exam_name for row in rows}),
    }


def top_exams(rows, limit=5):
    counts = Counter(row.exam_name for row in rows)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]


def total_value(rows):
    return sum((row.exam_value for row in rows), Decimal('0'))


def escape_csv_value(value):
    return '"' + str(value).replace('"', '""') + '"'


def build_csv_content(rows, range_key=DEFAULT_RANGE, vet=ALL, clinic=ALL, exam=ALL, generated_at=None):
    generated_at = generated_at or timezone.now()
    summary_rows = [
        ['Report', 'CVDE Exam History Export'],
        ['Generated At', format_datetime(generated_at)],
        ['Time Range', RANGE_LABELS.get(range_key, RANGE_LABELS[ALL])],
        ['Vet Filter', 'All vets' if vet == ALL else vet],
        ['Clinic Filter', 'All clinics' if clinic == ALL else clinic],
        ['Exam Filter', 'All exams' if exam == ALL else exam],
        ['Total Exam Items', len(rows)],
        ['Total Value', format_currency(total_value(rows))],
        [],
        ['Order ID', 'Ordered At', 'Exam', 'Vet', 'Clinic', 'Value'],
    ]
    detail_rows = [
        [
            row.order_id,
            format_datetime(row.created_at),
            row.exam_name,
            row.vet_name,
            row.clinic_name,
            format_currency(row.exam_value),
        ]
        for row in rows
    ]
    return CSV_LINE_END.join(
        ','.join(escape_csv_value(cell) for cell in line) for line in summary_rows + detail_rows
    )


def build_export_filename(now=None):
    local = timezone.localtime(now or timezone.now())
    return f'cvde-exam-history-{local:%Y-%m-%d-%H%M}.csv'


def encode_csv(content):
    return (CSV_BOM + content).encode('utf-8')
