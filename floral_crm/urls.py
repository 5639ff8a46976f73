"""
URL configuration for floral_crm project.
"""

from django.urls import path, include

from apps.home.views import home, about

urlpatterns = [
    path('', home, name='home'),
    path('about/', about, name='about'),
    path('crm/', include('apps.clients.urls')),
]
