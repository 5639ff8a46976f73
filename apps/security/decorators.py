"""
Decoradores de auditoría para las vistas del CRM.
"""

import functools
import inspect
import logging

logger = logging.getLogger(__name__)


def _log_access(entity_type: str, request):
    user = getattr(request, 'user', None)
    user_info = str(user) if user and user.is_authenticated else 'anonymous'

    logger.info(
        f"[AUDIT] Acceso a {entity_type} | "
        f"User: {user_info} | "
        f"Path: {request.path} | "
        f"Method: {request.method}"
    )


def audit_access(entity_type: str):
    """
    Decorador para auditar accesos a datos de clientes.

    Funciona con vistas síncronas y asíncronas.

    Uso:
        @audit_access('client')
        async def client_list(request):
            ...
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(request, *args, **kwargs):
                _log_access(entity_type, request)
                return await func(request, *args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            _log_access(entity_type, request)
            return func(request, *args, **kwargs)

        return wrapper
    return decorator
