from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "professional_type", "clinic_name", "registration_completed")
    list_filter = ("role", "professional_type", "registration_completed")
    search_fields = ("full_name", "crmv", "clinic_name", "user__username", "user__email")
    list_select_related = ("user",)
