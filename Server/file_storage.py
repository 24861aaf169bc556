"""
FileDepot Server - File Storage Management

This module handles the filesystem side of file storage including:
- Storage directory creation and removal
- Atomic-ish file writes (temporary sibling + rename)
- File reads and idempotent deletes
- SHA-256 hash calculation (streaming for large files)
- Listing stored files for consistency checks

Functions that fail raise exceptions from the exceptions package; deleting
something that is already gone is not an error.
"""

import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Union

from exceptions import (
    DirectoryCreateFailed, FileWriteFailed, FileReadFailed, FileDeleteFailed
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Suffix of temporary files written next to their destination
TEMP_SUFFIX = ".part"


# ==================== Storage Directory Management ====================

def CreateDirectory(path: PathLike, mode: int = 0o777, recursive: bool = True) -> bool:
    """
    Create a directory unless it already exists

    Args:
        path: Directory path
        mode: Permission bits (ignored on Windows)
        recursive: Whether to create missing parent directories

    Returns:
        bool: True if the directory was created or already exists

    Raises:
        DirectoryCreateFailed: If the directory could not be created
    """
    directory = Path(path)

    if directory.is_dir():
        return True

    try:
        # exist_ok tolerates a concurrent save creating the same directory
        directory.mkdir(mode=mode, parents=recursive, exist_ok=True)
        logger.info(f"Created storage directory: {directory}")
        return True

    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {str(e)}")
        raise DirectoryCreateFailed(f"Failed to create the directory for the file: {directory}") from e


def DeleteDirectory(path: PathLike) -> bool:
    """
    Delete an empty directory

    Directories are never removed recursively.

    Args:
        path: Directory path

    Returns:
        bool: True if the directory was deleted, False if it does not exist,
              is not a directory or could not be removed
    """
    directory = Path(path)

    if not directory.is_dir():
        return False

    try:
        directory.rmdir()
        logger.info(f"Deleted storage directory: {directory}")
        return True

    except OSError as e:
        logger.warning(f"Failed to delete directory {directory}: {str(e)}")
        return False


# ==================== File Operations ====================

def FileExists(path: PathLike) -> bool:
    """Check if a regular file exists at path"""
    return Path(path).is_file()


def _ReplaceAtomically(destination: Path, write) -> None:
    """
    Write a temporary sibling of destination and rename it into place

    Args:
        destination: Final file path
        write: Callable receiving the open temporary file object

    Raises:
        OSError: If writing or renaming fails (the temporary file is removed)
    """
    fd, temp_name = tempfile.mkstemp(
        dir=str(destination.parent),
        prefix=f".{destination.name}.",
        suffix=TEMP_SUFFIX
    )
    try:
        with os.fdopen(fd, 'wb') as f:
            write(f)
        os.replace(temp_name, destination)
    except BaseException:
        if os.path.exists(temp_name):
            os.remove(temp_name)
        raise


def WriteBytes(destination: PathLike, content: bytes) -> None:
    """
    Write bytes to destination without exposing a partially written file

    Raises:
        OSError: If the file cannot be written
    """
    _ReplaceAtomically(Path(destination), lambda f: f.write(content))


def CopyFile(source: PathLike, destination: PathLike) -> None:
    """
    Copy a file to destination without exposing a partially written file

    Raises:
        OSError: If the source cannot be read or the copy cannot be written
    """
    def write(f):
        with open(source, 'rb') as src:
            shutil.copyfileobj(src, f)

    _ReplaceAtomically(Path(destination), write)


def WriteResource(resource, destination: PathLike) -> bool:
    """
    Write the bytes of a resource to destination

    Args:
        resource: FileResource to save
        destination: Final file path

    Returns:
        bool: True once the file is completely written

    Raises:
        FileWriteFailed: If the resource could not be saved; no partial file
                         is left at destination
    """
    destination = Path(destination)

    try:
        saved = resource.SaveAs(destination)
    except OSError as e:
        logger.error(f"Failed to write {destination}: {str(e)}")
        _DiscardPartialFile(destination)
        raise FileWriteFailed(f"Failed to save the file: {destination}") from e

    if not saved:
        logger.error(f"Resource refused to save to {destination}")
        _DiscardPartialFile(destination)
        raise FileWriteFailed(f"Failed to save the file: {destination}")

    logger.debug(f"Wrote {destination}")
    return True


def _DiscardPartialFile(path: Path) -> None:
    """Remove whatever a failed write left at path"""
    try:
        if path.is_file():
            path.unlink()
    except OSError as e:
        logger.error(f"Failed to remove partially written file {path}: {str(e)}")


def RemoveFile(path: PathLike) -> bool:
    """
    Delete a file

    Args:
        path: File path

    Returns:
        bool: True if the file was deleted, False if it did not exist

    Raises:
        FileDeleteFailed: If the file exists but could not be deleted
    """
    file_path = Path(path)

    if not file_path.is_file():
        return False

    try:
        file_path.unlink()
        logger.info(f"Deleted file: {file_path}")
        return True

    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error(f"Failed to delete file {file_path}: {str(e)}")
        raise FileDeleteFailed(f"Failed to delete the file: {file_path}") from e


def ReadFile(path: PathLike) -> bytes:
    """
    Read the full contents of a file

    Raises:
        FileReadFailed: If the file does not exist or cannot be read
    """
    try:
        with open(path, 'rb') as f:
            return f.read()

    except OSError as e:
        logger.error(f"Failed to read file {path}: {str(e)}")
        raise FileReadFailed(f"Failed to read the file: {path}") from e


def ListStoredFiles(base_path: PathLike) -> List[str]:
    """
    List every stored file below base_path

    Temporary files of in-flight writes are skipped.

    Args:
        base_path: Files directory

    Returns:
        List[str]: Paths relative to base_path using forward slashes, sorted
    """
    root = Path(base_path)
    if not root.is_dir():
        return []

    stored = []
    for file_path in root.rglob('*'):
        if not file_path.is_file():
            continue
        if file_path.name.startswith('.') and file_path.name.endswith(TEMP_SUFFIX):
            continue
        stored.append(file_path.relative_to(root).as_posix())

    return sorted(stored)


# ==================== File Hash Calculation ====================

def CalculateFileHash(file_path: PathLike, chunk_size: int = 8192) -> str:
    """
    Calculate SHA-256 hash of a file using streaming/chunked reading

    Args:
        file_path: Path to file to hash
        chunk_size: Size of chunks to read (default 8KB)

    Returns:
        str: Hex-encoded SHA-256 hash

    Raises:
        FileReadFailed: If the file doesn't exist or cannot be read
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileReadFailed(f"File not found: {file_path}")

    sha256_hash = hashlib.sha256()

    try:
        with open(file_path, 'rb') as f:
            # Read file in chunks to avoid loading entire file into memory
            while chunk := f.read(chunk_size):
                sha256_hash.update(chunk)

        hash_hex = sha256_hash.hexdigest()
        logger.debug(f"Calculated hash for {file_path.name}: {hash_hex}")
        return hash_hex

    except OSError as e:
        logger.error(f"Failed to calculate hash for {file_path}: {str(e)}")
        raise FileReadFailed(f"Failed to calculate hash: {str(e)}") from e
