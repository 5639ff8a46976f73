from django.urls import path
from .views import client_list, client_create, client_edit, client_delete

urlpatterns = [
    path("", client_list, name="client-list"),
    path("add/", client_create, name="client-create"),
    path("<str:client_id>/edit/", client_edit, name="client-edit"),
    path("<str:client_id>/delete/", client_delete, name="client-delete"),
]
