"""
Local directory loader for model bundles.
"""

import asyncio
from pathlib import Path

from bounce_classifier.exceptions import ModelLoadError
from bounce_classifier.loaders.base_loader import BaseModelLoader


class FileSystemModelLoader(BaseModelLoader):
    """Reads bundle files from a directory on disk."""

    def __init__(self, directory: str | Path):
        super().__init__(str(directory))
        self.directory = Path(directory)

    def describe(self, name: str) -> str:
        return str(self.directory / name)

    async def load_bytes(self, name: str) -> bytes:
        path = self.directory / name
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ModelLoadError(
                f"Failed to read {name}",
                source=str(path),
                details={"error": f"{type(e).__name__}: {e}"},
            ) from e
