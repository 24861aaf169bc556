"""
FileDepot Server - Path Resolution

Pure functions mapping file record metadata to filenames, paths and urls.
Nothing in this module touches the filesystem except BuildBasePath, which
resolves the configured base directory to its real path.

Layout of a stored file:
  <base_path>/<file_dir>/<path>/<name>-<id>.<extension>
"""

from pathlib import Path
from typing import Optional

from models.infrastructure.file_record_like import FileRecordLike
from models.infrastructure.storage_config import StorageConfig


# ==================== Record Paths ====================

def GetInternalPath(record: FileRecordLike) -> str:
    """
    Get the sub-directory of a record inside the files directory

    Args:
        record: File record

    Returns:
        str: "<path>/" when the record has a path, otherwise ""
    """
    return f"{record.path}/" if record.path else ""


def ResolveFilename(record: FileRecordLike, extension: Optional[str] = None) -> str:
    """
    Get the on-disk filename of a record

    The id suffix keeps filenames unique across records sharing a name.

    Args:
        record: File record (must already have an id)
        extension: Extension to use instead of the record's own

    Returns:
        str: "<name>-<id>.<extension>"
    """
    if extension is None:
        extension = record.extension
    return f"{record.name}-{record.id}.{extension}"


def ResolveRelativePath(record: FileRecordLike) -> str:
    """Get the path of a record relative to the files directory"""
    return GetInternalPath(record) + ResolveFilename(record)


def ResolveAbsolutePath(record: FileRecordLike, base_path: str) -> str:
    """Get the path of a record under the given files directory"""
    return f"{base_path}/{ResolveRelativePath(record)}"


def ResolveUrl(record: FileRecordLike, base_url: str) -> str:
    """Get the url of a record under the given files url"""
    return f"{base_url}/{ResolveRelativePath(record)}"


# ==================== Base Paths ====================

def BuildBasePath(config: StorageConfig, absolute: bool = False) -> str:
    """
    Get the path to the files directory

    Args:
        config: Storage configuration
        absolute: Whether to prefix the resolved base path

    Returns:
        str: "<real base path>/<file_dir>" or just "<file_dir>"
    """
    parts = []
    if absolute:
        parts.append(Path(config.base_path).resolve().as_posix())
    parts.append(config.file_dir)
    return "/".join(parts)


def BuildBaseUrl(config: StorageConfig, absolute: bool = False,
                 request_base_url: Optional[str] = None) -> str:
    """
    Get the url of the files directory

    Args:
        config: Storage configuration
        absolute: Whether to prefix the base url
        request_base_url: Base url of the current request, used when the
                          configuration has no base_url

    Returns:
        str: Url without trailing slash
    """
    parts = []
    if absolute:
        if config.base_url is not None:
            parts.append(config.base_url.rstrip("/"))
        else:
            parts.append((request_base_url or "").rstrip("/"))
    parts.append(config.file_dir)
    return "/".join(parts).rstrip("/")
