"""Errores del CRM de clientes.

Todos son recuperables: la vista los convierte en una notificación para el
usuario y la lista en caché queda como estaba antes del intento.
"""


class CRMError(Exception):
    """Error base de las operaciones del CRM."""

    message = "CRM operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class LoadFailed(CRMError):
    message = "Failed to load clients"


class SaveFailed(CRMError):
    message = "Failed to save client"


class NotFound(SaveFailed):
    """Actualización de una identidad que el store no conoce."""

    message = "Client not found"


class DeleteFailed(CRMError):
    message = "Failed to delete client"


class DraftInvalid(CRMError):
    """El borrador no pasó la validación; no se contactó al store."""

    message = "Please correct the highlighted fields"

    def __init__(self, field_errors: dict):
        super().__init__()
        self.field_errors = dict(field_errors)
