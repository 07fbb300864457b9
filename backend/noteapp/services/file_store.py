"""
NoteApp Backend — JSON Collection File Store
==============================================

What:  Reads and writes whole collections (lists of pydantic models) as JSON
       array files, one file per collection.
Why:   Every repository operation is load → mutate → save on a full file;
       this module is the only place that touches the disk.
How:   Async file I/O via aiofiles; validation via a pydantic TypeAdapter;
       writes go to a temporary sibling file that is renamed over the target.
Who:   Used by UserRepository and NoteRepository.

Read policy:
    missing file          → empty list (not an error)
    JSON null             → empty list
    unreadable file       → StorageError
    malformed / wrong shape (including an empty file) → FormatError

Concurrency:
    lock(path) hands out one asyncio.Lock per resolved path. Holding it across
    a load → mutate → save cycle serializes writers within this process.
    Separate processes (several uvicorn workers) are NOT coordinated.
"""

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Type, TypeVar, Union

import aiofiles
import aiofiles.os
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from noteapp.exceptions import FormatError, StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
PathLike = Union[str, Path]


class FileStore:
    """
    Whole-collection JSON persistence.

    Lifecycle of a write:
        1. Parent directory is created if needed
        2. JSON is written to .<name>.<uuid>.tmp next to the target
        3. The temp file is renamed over the target (atomic on POSIX)
        4. On failure the temp file is removed and StorageError is raised
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._adapters: Dict[type, TypeAdapter] = {}

    def lock(self, path: PathLike) -> asyncio.Lock:
        """Return the lock guarding read-modify-write cycles on `path`."""
        key = str(Path(path).resolve())
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _adapter(self, model: Type[ModelT]) -> TypeAdapter:
        adapter = self._adapters.get(model)
        if adapter is None:
            adapter = self._adapters[model] = TypeAdapter(Optional[List[model]])
        return adapter

    async def read(self, path: PathLike, model: Type[ModelT]) -> List[ModelT]:
        """
        Load a collection file.

        Args:
            path: Collection file location
            model: Pydantic model of one element

        Returns:
            The decoded list, or [] when the file does not exist.

        Raises:
            StorageError: file exists but could not be read
            FormatError: content is not a JSON array of `model`
        """
        path = Path(path)
        try:
            async with aiofiles.open(path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.debug("Collection file %s does not exist, treating as empty", path)
            return []
        except OSError as e:
            logger.error("Failed to read %s: %s", path, str(e))
            raise StorageError(
                message="Error loading data",
                context={"path": str(path), "os_error": str(e)},
            )

        try:
            items = self._adapter(model).validate_json(raw)
        except PydanticValidationError as e:
            logger.error("Malformed collection file %s: %s", path, str(e))
            raise FormatError(
                context={"path": str(path), "errors": e.error_count()},
            )

        return items or []

    async def write(self, path: PathLike, items: Sequence[BaseModel]) -> None:
        """
        Overwrite a collection file with `items`.

        Raises:
            StorageError: directory creation, write or rename failed
        """
        path = Path(path)
        payload = json.dumps(
            [item.model_dump(mode="json") for item in items],
            ensure_ascii=False,
            indent=2,
        )
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, str(e))
            await self._cleanup(tmp_path)
            raise StorageError(
                message="Error saving data",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.debug("Wrote %d record(s) to %s", len(items), path)

    async def _cleanup(self, tmp_path: Path) -> None:
        try:
            await aiofiles.os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to clean up temp file %s: %s", tmp_path, str(e))
