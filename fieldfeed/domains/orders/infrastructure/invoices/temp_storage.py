"""
Transient storage for invoice attachments.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

from fieldfeed.domains.orders.application.ports import RenderedInvoice

logger = logging.getLogger(__name__)


class InvoiceTempStorage:
    """
    Writes rendered invoices to a scratch directory for the mail step.

    ``hold`` is the only way in: the file exists for the duration of the
    ``async with`` block and is removed on every exit path. Disk writes and
    removals run in a worker thread, like PDF rendering and SMTP delivery.
    """

    def __init__(self, storage_path: str | Path):
        self.storage_path = Path(storage_path)

    def _ensure_directory(self) -> None:
        self.storage_path.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def hold(self, rendered: RenderedInvoice) -> AsyncIterator[Path]:
        """Yield the path of a temporary copy of ``rendered``."""
        # Unique prefix keeps concurrent sends of the same invoice apart
        file_path = self.storage_path / f"{uuid4().hex[:8]}_{rendered.filename}"
        try:
            await asyncio.to_thread(self._write, file_path, rendered.content)
            logger.debug(f"Invoice stored for attachment: {file_path} ({len(rendered.content)} bytes)")
            yield file_path
        finally:
            await asyncio.to_thread(self.discard, file_path)

    def _write(self, file_path: Path, content: bytes) -> None:
        self._ensure_directory()
        file_path.write_bytes(content)

    def discard(self, file_path: Path) -> bool:
        try:
            file_path.unlink()
        except FileNotFoundError:
            return False
        logger.debug(f"Temporary invoice removed: {file_path.name}")
        return True

    def leftovers(self) -> list[Path]:
        """Files still present in the scratch directory."""
        if not self.storage_path.exists():
            return []
        return sorted(self.storage_path.glob("*.pdf"))
