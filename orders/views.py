import logging

from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required, get_profile, registration_required
from accounts.forms import first_form_error
from catalog.services import list_active_exams

from .formatting import format_currency, format_doctor_name, to_datetime_local_value
from .forms import AdminOrderUpdateForm, DriverCollectionForm, DriverPhoneForm, ExamOrderForm, HistoryFilterForm
from .services import repository
from .services.collection import (
    collection_state_for_order,
    mark_sample_received,
    needs_live_refresh,
    toggle_driver_requested,
)
from .services.export import (
    RANGE_LABELS,
    build_csv_content,
    build_export_filename,
    build_history_rows,
    encode_csv,
    filter_history_rows,
    history_filter_options,
    top_exams,
    total_value,
)
from .services.lifecycle import is_terminal, save_order_edit
from .services.notifications import build_driver_reminder_whatsapp_url, build_driver_whatsapp_url
from .services.pricing import price_selection
from .services.settings_store import get_driver_phone, has_valid_driver_phone, save_driver_phone

logger = logging.getLogger(__name__)


def _live_refresh_seconds():
    return getattr(settings, 'CVDE_LIVE_REFRESH_SECONDS', 60)


#
# Vet pages
#


@registration_required
def vet_home_view(request):
    profile = get_profile(request.user)
    orders = repository.list_orders(request.user)
    return render(
        request,
        'orders/vet_home.html',
        {
            'doctor_name': format_doctor_name(profile.full_name),
            'recent_orders': orders[:5],
            'order_count': len(orders),
            'open_count': sum(1 for order in orders if not is_terminal(order.status)),
        },
    )


@registration_required
def vet_new_order_view(request):
    catalog = list_active_exams()
    form = ExamOrderForm(request.POST or None, catalog=catalog)

    if request.method == 'POST':
        if not form.is_valid():
            messages.error(request, first_form_error(form))
        else:
            try:
                order = repository.create_order(request.user, form.cleaned_data, catalog=catalog)
            except ValidationError as exc:
                messages.error(request, exc.messages[0])
            else:
                messages.success(request, f'Exam order #{order.pk} sent successfully.')
                return redirect('orders:vet_history')

    selected_ids = form.data.getlist('exam_ids') if form.is_bound else []
    priced = price_selection(catalog, [int(value) for value in selected_ids if str(value).isdigit()])
    return render(
        request,
        'orders/vet_order_form.html',
        {
            'form': form,
            'catalog': catalog,
            'selected_lines': priced.lines,
            'total_value': priced.total,
        },
    )


@registration_required
@require_GET
def vet_price_preview_api(request):
    exam_ids = [int(value) for value in request.GET.getlist('exam_ids') if value.isdigit()]
    priced = price_selection(list_active_exams(), exam_ids)
    return JsonResponse(
        {
            'lines': [line.as_dict() for line in priced.lines],
            'total': str(priced.total),
            'total_display': format_currency(priced.total),
        }
    )


@registration_required
def vet_history_view(request):
    return render(request, 'orders/vet_history.html', {'orders': repository.list_orders(request.user)})


#
# Admin pages
#


def _latest_change(orders):
    latest = max((order.updated_at for order in orders), default=None)
    return latest.isoformat() if latest else None


def _admin_order_rows(orders, driver_phone, now):
    valid_phone = has_valid_driver_phone(driver_phone)
    rows = []
    for order in orders:
        state = collection_state_for_order(order, now)
        rows.append(
            {
                'order': order,
                'collection': state,
                'form': AdminOrderUpdateForm(
                    initial={
                        'status': order.status,
                        'scheduled_for': to_datetime_local_value(order.scheduled_for),
                        'admin_notes': order.admin_notes,
                        'version': order.version,
                    },
                    prefix=f'order-{order.pk}',
                ),
                'driver_url': build_driver_whatsapp_url(driver_phone, order) if valid_phone else None,
                'reminder_url': (
                    build_driver_reminder_whatsapp_url(driver_phone, order)
                    if valid_phone and state.is_overdue
                    else None
                ),
                'can_mark_received': order.driver_collection_requested and order.sample_received_at is None,
            }
        )
    return rows


@admin_required
def admin_orders_view(request):
    now = timezone.now()
    orders = repository.list_orders(request.user)
    driver_phone = get_driver_phone() or ''
    return render(
        request,
        'orders/admin_orders.html',
        {
            'rows': _admin_order_rows(orders, driver_phone, now),
            'driver_phone_form': DriverPhoneForm(initial={'driver_phone': driver_phone}),
            'has_valid_driver_phone': has_valid_driver_phone(driver_phone),
            'changed_at': _latest_change(orders),
            'live_refresh_seconds': _live_refresh_seconds(),
            'has_live_collections': any(needs_live_refresh(order) for order in orders),
        },
    )


@admin_required
@require_POST
def admin_update_order_view(request, order_id):
    form = AdminOrderUpdateForm(request.POST, prefix=f'order-{order_id}')
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('orders:admin_orders')

    try:
        save_order_edit(
            order_id,
            expected_version=form.cleaned_data.get('version'),
            status=form.cleaned_data['status'],
            scheduled_for=form.cleaned_data.get('scheduled_for'),
            admin_notes=form.cleaned_data.get('admin_notes') or '',
        )
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('orders:admin_orders')

    messages.success(request, 'Order updated.')
    return redirect('orders:admin_orders')


@admin_required
@require_POST
def admin_driver_collection_view(request, order_id):
    form = DriverCollectionForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('orders:admin_orders')

    checked = form.cleaned_data['driver_collection_requested']
    try:
        toggle_driver_requested(order_id, checked, expected_version=form.cleaned_data.get('version'))
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('orders:admin_orders')

    messages.success(request, 'Driver request saved.' if checked else 'Driver request cleared.')
    return redirect('orders:admin_orders')


@admin_required
@require_POST
def admin_sample_received_view(request, order_id):
    form = DriverCollectionForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('orders:admin_orders')

    try:
        mark_sample_received(order_id, expected_version=form.cleaned_data.get('version'))
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('orders:admin_orders')

    messages.success(request, 'Sample receipt saved.')
    return redirect('orders:admin_orders')


@admin_required
@require_POST
def admin_driver_phone_view(request):
    form = DriverPhoneForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('orders:admin_orders')

    save_driver_phone(form.cleaned_data['driver_phone'])
    messages.success(request, 'Driver phone saved.')
    return redirect('orders:admin_orders')


@admin_required
@require_GET
def admin_orders_state_api(request):
    now = timezone.now()
    orders = repository.list_orders(request.user)
    payload = []
    for order in orders:
        state = collection_state_for_order(order, now)
        payload.append(
            {
                'id': order.pk,
                'status': order.status,
                'version': order.version,
                'collection_state': state.state,
                'collection_message': state.message,
                'is_overdue': state.is_overdue,
                'updated_at': order.updated_at.isoformat(),
            }
        )
    return JsonResponse(
        {
            'generated_at': now.isoformat(),
            'changed_at': _latest_change(orders),
            'orders': payload,
        }
    )


def _filtered_history(request):
    filter_form = HistoryFilterForm(request.GET or None)
    filters = filter_form.filters()
    all_rows = build_history_rows(repository.list_orders(request.user))
    rows = filter_history_rows(all_rows, **filters)
    return filter_form, filters, all_rows, rows


@admin_required
@require_GET
def admin_history_view(request):
    filter_form, filters, all_rows, rows = _filtered_history(request)
    return render(
        request,
        'orders/admin_history.html',
        {
            'filter_form': filter_form,
            'filters': filters,
            'range_label': RANGE_LABELS[filters['range_key']],
            'options': history_filter_options(all_rows),
            'rows': rows,
            'total_value': total_value(rows),
            'top_exams': top_exams(rows),
        },
    )


@admin_required
@require_GET
def admin_history_csv_view(request):
    _, filters, _, rows = _filtered_history(request)
    now = timezone.now()
    content = build_csv_content(rows, generated_at=now, **filters)
    response = HttpResponse(encode_csv(content), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{build_export_filename(now)}"'
    logger.info('User %s exported %s history row(s)', request.user.pk, len(rows))
    return response
