"""Filesystem existence probe used by the file rules."""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Answers whether a path exists. Safe to call concurrently."""

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        """Return True if the path exists.

        Raises:
            OSError: if existence can't be determined (e.g. permission denied)
        """
        ...


class LocalFileSystem(FileSystem):
    """Existence checks against the local disk, run in a worker thread."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(self._exists, Path(path))

    @staticmethod
    def _exists(path: Path) -> bool:
        try:
            path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True
