"""
ASGI config para Floral CRM.

Monta Django y FastAPI en la misma aplicación ASGI.
- /api/* -> FastAPI (store de clientes)
- /* -> Django (sitio informativo y CRM)
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'floral_crm.settings')

# Inicializar Django primero
django_asgi_app = get_asgi_application()

# Conectar MongoDB
from django.conf import settings
from floral_crm.mongodb import connect_mongodb
connect_mongodb(settings.MONGODB_DB, settings.MONGODB_HOST, settings.MONGODB_PORT)

# Importar FastAPI después de inicializar Django
from floral_crm.fastapi_app import fastapi_app


async def application(scope, receive, send):
    """
    Aplicación ASGI que enruta entre FastAPI y Django.

    - Rutas /api/* y /openapi.json van a FastAPI
    - El resto va a Django
    """
    if scope["type"] == "http":
        path = scope.get("path", "")

        # Rutas API y OpenAPI van a FastAPI
        if path.startswith("/api/") or path == "/openapi.json":
            await fastapi_app(scope, receive, send)
        else:
            # El resto va a Django
            await django_asgi_app(scope, receive, send)
    elif scope["type"] == "lifespan":
        # El ciclo de vida lo maneja FastAPI
        await fastapi_app(scope, receive, send)
    else:
        # WebSockets y otros van a Django
        await django_asgi_app(scope, receive, send)
