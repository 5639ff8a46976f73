"""
Vistas Django del CRM de clientes.

Las vistas solo usan las cuatro operaciones de ``ClientRecordManager`` y su
lista en caché; cada request trabaja con su propio manager.
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.core.paginator import Paginator
from django.shortcuts import redirect, render

from apps.security.decorators import audit_access

from .errors import DeleteFailed, DraftInvalid, LoadFailed, NotFound, SaveFailed
from .manager import ClientRecordManager
from .schemas import DEFAULT_STATUS, EVENT_TYPES, STATUSES, format_iso_date
from .store import HttpEntityStore
from .table import (
    EVENT_TYPE_COLORS, PAGE_SIZES, SORT_KEYS, STATUS_COLORS,
    filter_records, format_budget, format_event_date, page_size_from, sort_records,
)

logger = logging.getLogger(__name__)

FORM_FIELDS = (
    "firstName", "lastName", "email", "phone", "company", "eventType",
    "eventDate", "status", "budget", "contactDate", "notes",
)


def get_manager() -> ClientRecordManager:
    store = HttpEntityStore(settings.CRM_API_BASE_URL, timeout=settings.CRM_API_TIMEOUT)
    return ClientRecordManager(store)


def _form_values(post) -> dict:
    values = {name: post.get(name, "") for name in FORM_FIELDS}
    # "$ 1,250" -> "1250"
    values["budget"] = values["budget"].replace("$", "").replace(",", "").strip()
    return values


def _form_context(values: dict, errors=None, record_id=None) -> dict:
    form = dict(values)
    for name in ("eventDate", "contactDate"):
        # <input type="date"> espera YYYY-MM-DD
        if form.get(name) and not isinstance(form[name], str):
            form[name] = format_iso_date(form[name])
    if form.get("budget") is None:
        form["budget"] = ""
    return {
        "form": form,
        "errors": errors or {},
        "record_id": record_id,
        "event_types": EVENT_TYPES,
        "statuses": STATUSES,
    }


def _row(record) -> dict:
    return {
        "id": record.id,
        "name": record.full_name,
        "email": record.email or "",
        "phone": record.phone or "",
        "event_type": record.event_type,
        "event_type_color": EVENT_TYPE_COLORS.get(record.event_type, "default"),
        "event_date": format_event_date(record.event_date),
        "status": record.status,
        "status_color": STATUS_COLORS.get(record.status, "default"),
        "budget": format_budget(record.budget),
    }


@audit_access('client')
async def client_list(request):
    """Tabla de clientes con filtros por tipo de evento y estado, orden y paginación."""
    manager = get_manager()
    try:
        await manager.load_all()
    except LoadFailed as e:
        messages.error(request, str(e))

    event_types = [v for v in request.GET.getlist("eventType") if v in EVENT_TYPES]
    statuses = [v for v in request.GET.getlist("status") if v in STATUSES]
    records = filter_records(manager.records, event_types, statuses)

    sort = request.GET.get("sort")
    descending = request.GET.get("order") == "desc"
    if sort in SORT_KEYS:
        records = sort_records(records, sort, descending)

    page_size = page_size_from(request.GET.get("pageSize"))
    page = Paginator([_row(r) for r in records], page_size).get_page(request.GET.get("page"))

    logger.info(f"[CLIENTS] Listados {len(records)} de {len(manager.records)} clientes")
    return render(request, "clients/list.html", {
        "page": page,
        "total": len(records),
        "event_types": EVENT_TYPES,
        "statuses": STATUSES,
        "selected_event_types": event_types,
        "selected_statuses": statuses,
        "sort": sort,
        "order": "desc" if descending else "asc",
        "page_size": page_size,
        "page_sizes": PAGE_SIZES,
    })


@audit_access('client')
async def client_create(request):
    """Agregar un cliente nuevo."""
    if request.method != "POST":
        return render(request, "clients/form.html", _form_context({"status": DEFAULT_STATUS}))

    values = _form_values(request.POST)
    manager = get_manager()
    try:
        await manager.create_record(values)
    except DraftInvalid as e:
        return render(request, "clients/form.html", _form_context(values, e.field_errors), status=400)
    except SaveFailed as e:
        messages.error(request, str(e))
        return render(request, "clients/form.html", _form_context(values))
    except LoadFailed as e:
        messages.success(request, "Client added successfully")
        messages.error(request, str(e))
        return redirect("client-list")

    messages.success(request, "Client added successfully")
    return redirect("client-list")


@audit_access('client')
async def client_edit(request, client_id):
    """Editar un cliente existente."""
    manager = get_manager()

    if request.method != "POST":
        try:
            await manager.load_all()
        except LoadFailed as e:
            messages.error(request, str(e))
            return redirect("client-list")
        record = manager.get(client_id)
        if record is None:
            messages.error(request, "Client not found")
            return redirect("client-list")
        return render(request, "clients/form.html", _form_context(record.to_form_values(), record_id=client_id))

    values = _form_values(request.POST)
    try:
        await manager.update_record(client_id, values)
    except DraftInvalid as e:
        return render(
            request, "clients/form.html",
            _form_context(values, e.field_errors, record_id=client_id), status=400,
        )
    except NotFound as e:
        messages.error(request, str(e))
        return redirect("client-list")
    except SaveFailed as e:
        messages.error(request, str(e))
        return render(request, "clients/form.html", _form_context(values, record_id=client_id))
    except LoadFailed as e:
        messages.success(request, "Client updated successfully")
        messages.error(request, str(e))
        return redirect("client-list")

    messages.success(request, "Client updated successfully")
    return redirect("client-list")


@audit_access('client')
async def client_delete(request, client_id):
    """Confirmar y eliminar un cliente."""
    manager = get_manager()

    if request.method != "POST":
        try:
            await manager.load_all()
        except LoadFailed as e:
            messages.error(request, str(e))
            return redirect("client-list")
        record = manager.get(client_id)
        if record is None:
            messages.error(request, "Client not found")
            return redirect("client-list")
        return render(request, "clients/delete.html", {"client": record})

    try:
        await manager.delete_record(client_id)
    except DeleteFailed as e:
        messages.error(request, str(e))
        return redirect("client-list")
    except LoadFailed as e:
        messages.success(request, "Client deleted successfully")
        messages.error(request, str(e))
        return redirect("client-list")

    messages.success(request, "Client deleted successfully")
    return redirect("client-list")
