"""
Aplicación FastAPI del CRM.

Expone la API REST de clientes que el CRM usa como store remoto. Se monta
junto con Django en ``floral_crm.asgi``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.clients.api import router as clients_router

# Crear aplicación FastAPI
fastapi_app = FastAPI(
    title="Floral CRM API",
    description="API de clientes del CRM de la floristería",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Configurar CORS
fastapi_app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registrar routers
fastapi_app.include_router(clients_router)


@fastapi_app.get("/api/health")
def global_health():
    """Health check global."""
    from apps.clients.models import Client

    services = {}

    # Verificar clientes
    try:
        Client.objects.first()
        services["clients"] = {"status": "ok", "database": "connected"}
    except Exception as e:
        services["clients"] = {"status": "error", "database": str(e)}

    all_ok = all(s["status"] == "ok" for s in services.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "services": services
    }
