"""API FastAPI del store de clientes del CRM (MongoDB)."""

import logging

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException

from .models import Client
from .schemas import ClientDraft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["Clientes"])


def validate_object_id(client_id: str) -> bool:
    """Valida que el ID sea un ObjectId válido de MongoDB."""
    try:
        ObjectId(client_id)
        return True
    except (InvalidId, TypeError):
        return False


def get_client_or_404(client_id: str) -> Client:
    # Un ID mal formado no puede existir: se reporta como no encontrado
    if not validate_object_id(client_id):
        raise HTTPException(status_code=404, detail="Cliente no encontrado")

    client = Client.objects(id=client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Cliente no encontrado")
    return client


@router.get("/")
def list_clients():
    """Lista todos los clientes."""
    data = [client.to_dict() for client in Client.objects.all()]
    return {"success": True, "data": data}


@router.post("/", status_code=201)
def create_client(draft: ClientDraft):
    """Crea un nuevo cliente; el ID lo asigna MongoDB."""
    client = Client().apply_draft(draft)
    client.save()

    logger.info(f"[CLIENTS-API] Cliente '{client}' creado con ID {client.id}")
    return {"success": True, "data": client.to_dict()}


@router.get("/{client_id}")
def get_client(client_id: str):
    """Obtiene un cliente por ID."""
    client = get_client_or_404(client_id)
    return {"success": True, "data": client.to_dict()}


@router.put("/{client_id}")
def update_client(client_id: str, draft: ClientDraft):
    """Reemplaza los campos editables de un cliente."""
    client = get_client_or_404(client_id)
    client.apply_draft(draft)
    client.save()

    logger.info(f"[CLIENTS-API] Cliente {client_id} actualizado")
    return {"success": True, "data": client.to_dict()}


@router.delete("/{client_id}")
def delete_client(client_id: str):
    """Elimina un cliente."""
    client = get_client_or_404(client_id)
    client.delete()

    logger.info(f"[CLIENTS-API] Cliente {client_id} eliminado")
    return {"success": True, "data": None}


@router.get("/health/status")
def health():
    """Health check del store de clientes."""
    try:
        Client.objects.first()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return {
        "service": "clients",
        "status": "ok" if db_status == "connected" else "error",
        "database": "MongoDB",
        "connection": db_status
    }
