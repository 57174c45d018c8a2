from django.contrib import admin

from .models import ExamCatalogItem, FaqEntry


@admin.register(ExamCatalogItem)
class ExamCatalogItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'current_price', 'active', 'updated_at')
    list_filter = ('active', 'category')
    search_fields = ('name', 'description', 'category')
    list_editable = ('current_price', 'active')


@admin.register(FaqEntry)
class FaqEntryAdmin(admin.ModelAdmin):
    list_display = ('question', 'category', 'active', 'updated_at')
    list_filter = ('active', 'category')
    search_fields = ('question', 'answer')
