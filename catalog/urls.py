from django.urls import path

from . import views

app_name = 'catalog'

urlpatterns = [
    path('prices/', views.vet_prices_view, name='vet_prices'),
    path('faq/', views.vet_faq_view, name='vet_faq'),

    path('admin/exams/', views.admin_exams_view, name='admin_exams'),
    path('admin/exams/create/', views.admin_create_exam_view, name='admin_create_exam'),
    path('admin/exams/<int:exam_id>/update/', views.admin_update_exam_view, name='admin_update_exam'),
    path('admin/exams/<int:exam_id>/price/', views.admin_update_exam_price_view, name='admin_update_exam_price'),
    path('admin/exams/<int:exam_id>/toggle/', views.admin_toggle_exam_view, name='admin_toggle_exam'),
    path('admin/faq/', views.admin_faq_view, name='admin_faq'),
    path('admin/faq/<int:entry_id>/toggle/', views.admin_toggle_faq_view, name='admin_toggle_faq'),
]
