from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, Optional

import anyio
from starlette.datastructures import UploadFile

from spend.types import UploadedFile

LOG = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def is_uploaded_file(value: Any) -> bool:
    return isinstance(value, UploadFile) and bool(value.filename)


def _content_type(upload: UploadFile) -> str:
    return (upload.content_type or "").split(";", 1)[0].strip().lower()


async def remove_temp_file(path: Path) -> bool:
    try:
        await anyio.Path(path).unlink()
    except OSError as exc:
        LOG.error("Error removing temp file %s: %s", path, exc)
        return False
    return True


class FileReceiver:
    """
    Stages one uploaded file under ``upload_dir`` named after its original
    filename. Every rejection returns ``None``: callers read that as
    "nothing to summarize".
    """

    def __init__(
        self,
        upload_dir: Path,
        max_bytes: int,
        allowed_types: Iterable[str] = ("text/csv",),
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.allowed_types = {t.lower() for t in allowed_types}

    async def ensure_dir(self) -> None:
        await anyio.Path(self.upload_dir).mkdir(parents=True, exist_ok=True)

    def temp_path(self, filename: str) -> Path:
        return self.upload_dir / Path(filename).name

    async def receive(self, value: Any) -> Optional[UploadedFile]:
        if not is_uploaded_file(value):
            LOG.info("No uploaded file in submission")
            return None

        content_type = _content_type(value)
        if content_type not in self.allowed_types:
            LOG.info("Rejected upload %r with content type %r", value.filename, content_type)
            return None

        if value.size is not None and value.size > self.max_bytes:
            LOG.warning("Rejected upload %r: %s bytes over limit %s", value.filename, value.size, self.max_bytes)
            return None

        name = Path(value.filename).name
        if name in ("", ".", ".."):
            LOG.info("Rejected upload with unusable filename %r", value.filename)
            return None

        path = self.temp_path(name)
        written = 0
        try:
            await self.ensure_dir()
            async with await anyio.open_file(path, "wb") as fh:
                while True:
                    chunk = await value.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        break
                    await fh.write(chunk)
        except OSError:
            LOG.exception("Could not stage upload %r at %s", name, path)
            await remove_temp_file(path)
            return None

        if written > self.max_bytes:
            LOG.warning("Rejected upload %r: over limit %s bytes", name, self.max_bytes)
            await remove_temp_file(path)
            return None

        return UploadedFile(
            filepath=path,
            content_type=content_type,
            filename=name,
            size_bytes=written,
        )

    @asynccontextmanager
    async def staged(self, value: Any) -> AsyncIterator[Optional[UploadedFile]]:
        """Yield the staged upload and always attempt to delete it afterwards."""
        uploaded = await self.receive(value)
        try:
            yield uploaded
        finally:
            if uploaded is not None:
                await remove_temp_file(uploaded.filepath)
