from django.urls import path

from . import views

app_name = 'orders'

urlpatterns = [
    path('', views.vet_home_view, name='vet_home'),
    path('new/', views.vet_new_order_view, name='vet_new_order'),
    path('history/', views.vet_history_view, name='vet_history'),
    path('api/price-preview/', views.vet_price_preview_api, name='price_preview_api'),

    path('admin/orders/', views.admin_orders_view, name='admin_orders'),
    path('admin/orders/<int:order_id>/update/', views.admin_update_order_view, name='admin_update_order'),
    path('admin/orders/<int:order_id>/driver/', views.admin_driver_collection_view, name='admin_driver_collection'),
    path('admin/orders/<int:order_id>/sample-received/', views.admin_sample_received_view, name='admin_sample_received'),
    path('admin/driver-phone/', views.admin_driver_phone_view, name='admin_driver_phone'),
    path('admin/history/', views.admin_history_view, name='admin_history'),
    path('admin/history/export.csv', views.admin_history_csv_view, name='admin_history_csv'),
    path('admin/api/orders-state/', views.admin_orders_state_api, name='admin_orders_state_api'),
]
