import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, registration_required
from accounts.forms import first_form_error

from .forms import ExamCreateForm, ExamDetailsForm, ExamPriceForm, FaqEntryForm
from .models import ExamCatalogItem, FaqEntry
from .services import (
    create_exam,
    create_faq_entry,
    group_exams_by_category,
    list_active_exams,
    list_active_faq_entries,
    list_all_exams,
    list_all_faq_entries,
    set_exam_active,
    set_faq_entry_active,
    update_exam,
    update_exam_price,
)

logger = logging.getLogger(__name__)


@registration_required
def vet_prices_view(request):
    return render(
        request,
        'catalog/vet_prices.html',
        {'exams_by_category': group_exams_by_category(list_active_exams())},
    )


@registration_required
def vet_faq_view(request):
    return render(request, 'catalog/vet_faq.html', {'faq_entries': list_active_faq_entries()})


@admin_required
def admin_exams_view(request):
    return render(
        request,
        'catalog/admin_exams.html',
        {
            'exams': list_all_exams(),
            'create_form': ExamCreateForm(),
        },
    )


@admin_required
@require_POST
def admin_create_exam_view(request):
    form = ExamCreateForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('catalog:admin_exams')

    try:
        create_exam(
            name=form.cleaned_data['name'],
            price=form.cleaned_data['price'],
            description=form.cleaned_data['description'],
            category=form.cleaned_data['category'],
        )
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('catalog:admin_exams')

    messages.success(request, 'Exam created.')
    return redirect('catalog:admin_exams')


@admin_required
@require_POST
def admin_update_exam_view(request, exam_id):
    exam = get_object_or_404(ExamCatalogItem, pk=exam_id)
    form = ExamDetailsForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('catalog:admin_exams')

    try:
        update_exam(
            exam,
            name=form.cleaned_data['name'],
            description=form.cleaned_data['description'],
            category=form.cleaned_data['category'],
            active=form.cleaned_data['active'],
        )
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('catalog:admin_exams')

    messages.success(request, 'Exam details updated.')
    return redirect('catalog:admin_exams')


@admin_required
@require_POST
def admin_update_exam_price_view(request, exam_id):
    exam = get_object_or_404(ExamCatalogItem, pk=exam_id)
    form = ExamPriceForm(request.POST)
    if not form.is_valid():
        messages.error(request, first_form_error(form))
        return redirect('catalog:admin_exams')

    try:
        update_exam_price(exam, form.cleaned_data['price'])
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
        return redirect('catalog:admin_exams')

    messages.success(request, 'Price updated.')
    return redirect('catalog:admin_exams')


@admin_required
@require_POST
def admin_toggle_exam_view(request, exam_id):
    exam = get_object_or_404(ExamCatalogItem, pk=exam_id)
    set_exam_active(exam, not exam.active)
    messages.success(request, 'Exam activated.' if exam.active else 'Exam deactivated.')
    return redirect('catalog:admin_exams')


@admin_required
def admin_faq_view(request):
    form = FaqEntryForm(request.POST or None)
    if request.method == 'POST':
        if form.is_valid():
            create_faq_entry(**form.cleaned_data)
            messages.success(request, 'FAQ entry created.')
            return redirect('catalog:admin_faq')
        messages.error(request, first_form_error(form))

    return render(request, 'catalog/admin_faq.html', {'form': form, 'faq_entries': list_all_faq_entries()})


@admin_required
@require_POST
def admin_toggle_faq_view(request, entry_id):
    entry = get_object_or_404(FaqEntry, pk=entry_id)
    set_faq_entry_active(entry, not entry.active)
    messages.success(request, 'FAQ entry updated.')
    return redirect('catalog:admin_faq')
