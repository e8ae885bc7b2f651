"""
Model bundle loaders.

resolve_loader() picks the concrete loader from the configured location:
http(s) URLs go through HttpModelLoader, anything else is a directory.
"""

from pathlib import Path

from bounce_classifier.loaders.base_loader import BaseModelLoader
from bounce_classifier.loaders.file_loader import FileSystemModelLoader
from bounce_classifier.loaders.http_loader import HttpModelLoader


def resolve_loader(model_path: str | Path, timeout: float = 30.0) -> BaseModelLoader:
    """Build the loader matching a model location."""
    location = str(model_path)
    if location.startswith(("http://", "https://")):
        return HttpModelLoader(location, timeout=timeout)
    return FileSystemModelLoader(location)


__all__ = [
    "BaseModelLoader",
    "FileSystemModelLoader",
    "HttpModelLoader",
    "resolve_loader",
]
