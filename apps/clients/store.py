"""
Store de entidades para los clientes.

Define el contrato asíncrono que consume ``ClientRecordManager`` y una
implementación HTTP sobre la API REST de ``/api/clients``.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Fallo genérico del store remoto: no trae un código de causa utilizable."""


class StoreNotFound(StoreError):
    """El store respondió que la identidad no existe."""


@dataclass
class ListResult:
    success: bool
    data: List[Dict[str, Any]] = field(default_factory=list)


class EntityStore(ABC):
    """Contrato de persistencia remota para un tipo de registro."""

    @abstractmethod
    async def list(self) -> ListResult:
        """Devuelve todos los registros."""

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Crea un registro; el store asigna la identidad."""

    @abstractmethod
    async def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Reemplaza los campos editables del registro ``record_id``."""

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Elimina el registro ``record_id``."""


class HttpEntityStore(EntityStore):
    """
    EntityStore sobre la API REST de clientes.

    Cada operación abre su propio ``httpx.AsyncClient``; ``transport`` permite
    inyectar un transporte (p. ej. ``httpx.ASGITransport``) en pruebas.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _url(self, record_id: Optional[str] = None) -> str:
        if record_id is None:
            return f"{self.base_url}/"
        return f"{self.base_url}/{record_id}"

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[STORE] {method} {url} falló: {e}")
            raise StoreError(str(e)) from e

        if response.status_code == 404:
            raise StoreNotFound(f"{method} {url}: not found")
        if response.is_error:
            logger.error(f"[STORE] {method} {url} respondió {response.status_code}")
            raise StoreError(f"{method} {url}: HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise StoreError(f"{method} {url}: invalid JSON body") from e
        if not isinstance(body, dict):
            raise StoreError(f"{method} {url}: unexpected body")
        return body

    async def list(self) -> ListResult:
        body = await self._request("GET", self._url())
        data = body.get("data")
        return ListResult(
            success=bool(body.get("success")),
            data=data if isinstance(data, list) else [],
        )

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        body = await self._request("POST", self._url(), json=data)
        return self._payload(body)

    async def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        body = await self._request("PUT", self._url(record_id), json=data)
        return self._payload(body)

    async def delete(self, record_id: str) -> None:
        body = await self._request("DELETE", self._url(record_id))
        if not body.get("success"):
            raise StoreError(f"DELETE {record_id}: store reported failure")

    @staticmethod
    def _payload(body: Dict[str, Any]) -> Dict[str, Any]:
        if not body.get("success") or not isinstance(body.get("data"), dict):
            raise StoreError("store reported failure")
        return body["data"]
