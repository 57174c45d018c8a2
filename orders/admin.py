from django.contrib import admin

from .models import AppSetting, ExamOrder


@admin.register(ExamOrder)
class ExamOrderAdmin(admin.ModelAdmin):
    list_display = (
        'id',
        'patient_name',
        'owner_name',
        'vet_name_snapshot',
        'vet_clinic_name',
        'status',
        'total_value',
        'request_collection',
        'driver_collection_requested',
        'sample_received_at',
        'created_at',
    )
    list_filter = ('status', 'request_collection', 'driver_collection_requested', 'vet_professional_type')
    search_fields = ('patient_name', 'owner_name', 'vet_name_snapshot', 'vet_clinic_name', 'vet__email')
    readonly_fields = ('selected_exams', 'total_value', 'version', 'created_at', 'updated_at')
    list_select_related = ('vet',)
    date_hierarchy = 'created_at'


@admin.register(AppSetting)
class AppSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'updated_at')
    search_fields = ('key',)
