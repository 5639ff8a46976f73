"""
Orquestación CRUD de clientes contra el store remoto.

El manager mantiene la lista en caché que lee la capa de presentación.
Tras cada mutación exitosa recarga la lista completa desde el store en vez
de parchear la caché localmente.
"""

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import DeleteFailed, LoadFailed, NotFound, SaveFailed
from .schemas import ClientDraft, ClientRecord
from .store import EntityStore, StoreError, StoreNotFound

logger = logging.getLogger(__name__)

DraftInput = Union[ClientDraft, Mapping[str, Any]]


class ClientRecordManager:
    """
    Media entre las acciones del usuario (cargar, agregar, editar, eliminar)
    y un ``EntityStore``.

    ``records`` y ``loading`` son de solo lectura para la presentación; solo
    las cuatro operaciones los modifican. Las llamadas concurrentes no se
    deduplican.
    """

    def __init__(self, store: EntityStore):
        self._store = store
        self._records: Tuple[ClientRecord, ...] = ()
        self._loading = False

    @property
    def records(self) -> Tuple[ClientRecord, ...]:
        return self._records

    @property
    def loading(self) -> bool:
        return self._loading

    async def load_all(self) -> Tuple[ClientRecord, ...]:
        """Reemplaza la caché con la lista del store. Si falla, la caché no cambia."""
        self._loading = True
        try:
            result = await self._store.list()
        except StoreError as e:
            logger.error(f"[CRM] Error cargando clientes: {e}")
            raise LoadFailed() from e
        finally:
            self._loading = False

        if not result.success:
            logger.error("[CRM] El store reportó un fallo al listar clientes")
            raise LoadFailed()

        records = []
        for item in result.data:
            try:
                records.append(ClientRecord.model_validate(item))
            except ValidationError:
                # Entradas inválidas se omiten para no romper la tabla
                item_id = item.get("_id") if isinstance(item, dict) else item
                logger.warning(f"[CRM] Cliente inválido omitido: {item_id!r}")
        self._records = tuple(records)
        logger.info(f"[CRM] {len(self._records)} clientes cargados")
        return self._records

    async def create_record(self, draft: DraftInput) -> ClientRecord:
        draft = self._validated(draft)
        try:
            created = ClientRecord.model_validate(await self._store.create(draft.to_payload()))
        except (StoreError, ValidationError) as e:
            logger.error(f"[CRM] Error creando cliente: {e}")
            raise SaveFailed() from e

        logger.info(f"[CRM] Cliente {created.id} creado")
        await self.load_all()
        return created

    async def update_record(self, record_id: str, draft: DraftInput) -> ClientRecord:
        draft = self._validated(draft)
        try:
            updated = ClientRecord.model_validate(
                await self._store.update(record_id, draft.to_payload())
            )
        except StoreNotFound as e:
            logger.warning(f"[CRM] Cliente {record_id} no encontrado al actualizar")
            raise NotFound() from e
        except (StoreError, ValidationError) as e:
            logger.error(f"[CRM] Error actualizando cliente {record_id}: {e}")
            raise SaveFailed() from e

        logger.info(f"[CRM] Cliente {record_id} actualizado")
        await self.load_all()
        return updated

    async def delete_record(self, record_id: str) -> None:
        try:
            await self._store.delete(record_id)
        except StoreError as e:
            logger.error(f"[CRM] Error eliminando cliente {record_id}: {e}")
            raise DeleteFailed() from e

        logger.info(f"[CRM] Cliente {record_id} eliminado")
        await self.load_all()

    def get(self, record_id: str) -> Optional[ClientRecord]:
        """Busca un cliente en la caché actual."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    @staticmethod
    def _validated(draft: DraftInput) -> ClientDraft:
        # Valida antes de tocar el store; DraftInvalid lleva los errores por campo
        if isinstance(draft, ClientDraft):
            return draft
        return ClientDraft.from_form(draft)
