from django.conf import settings
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from accounts.views import home_view

urlpatterns = [
    path('', home_view, name='root_home'),
    path('login/', auth_views.LoginView.as_view(), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),
    path('accounts/', include(('accounts.urls', 'accounts'), namespace='accounts')),
    path('catalog/', include(('catalog.urls', 'catalog'), namespace='catalog')),
    path('orders/', include(('orders.urls', 'orders'), namespace='orders')),
]

if getattr(settings, 'ENABLE_DJANGO_ADMIN', True):
    urlpatterns.insert(1, path('admin/', admin.site.urls))
