"""
FileDepot Server - File Resources

Resources are binary payloads waiting to be stored. FileManager only talks
to the FileResource interface; concrete resources wrap an in-memory upload or
a file already staged on disk.
"""

import logging
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from exceptions import FileReadFailed
from file_storage import WriteBytes, CopyFile

logger = logging.getLogger(__name__)

# Mime type used when none is given and none can be guessed
DEFAULT_MIME_TYPE = "application/octet-stream"


def GuessMimeType(filename: str) -> str:
    """Guess the mime type of a filename, falling back to octet-stream"""
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or DEFAULT_MIME_TYPE


class FileResource(ABC):
    """
    Binary payload pending persistence
    """

    @abstractmethod
    def GetName(self) -> str:
        """Original filename including extension"""

    @abstractmethod
    def GetMimeType(self) -> str:
        """Mime type of the content"""

    @abstractmethod
    def GetSize(self) -> int:
        """Size of the content in bytes"""

    @abstractmethod
    def SaveAs(self, path: Union[str, Path]) -> bool:
        """
        Write the content to path

        Returns:
            bool: True if the content was completely written
        """

    def GetExtension(self) -> str:
        """Extension of the original filename without the leading dot"""
        name = self.GetName()
        if '.' not in name:
            return ""
        return name.rsplit('.', 1)[1]


class UploadedFileResource(FileResource):
    """
    Resource held in memory, e.g. the body of an HTTP upload
    """

    def __init__(self, filename: str, content: bytes, mime_type: Optional[str] = None):
        """
        Args:
            filename: Original filename of the upload
            content: File content
            mime_type: Content type reported by the client (guessed if None)
        """
        self.filename = filename
        self.content = content
        self.mime_type = mime_type or GuessMimeType(filename)

    def GetName(self) -> str:
        return self.filename

    def GetMimeType(self) -> str:
        return self.mime_type

    def GetSize(self) -> int:
        return len(self.content)

    def SaveAs(self, path: Union[str, Path]) -> bool:
        WriteBytes(path, self.content)
        return True


class LocalFileResource(FileResource):
    """
    Resource staged as a file on the local disk
    """

    def __init__(self, source_path: Union[str, Path], filename: Optional[str] = None,
                 mime_type: Optional[str] = None):
        """
        Args:
            source_path: Path of the staged file
            filename: Original filename (defaults to the staged file's name)
            mime_type: Content type (guessed from the filename if None)
        """
        self.source_path = Path(source_path)
        self.filename = filename or self.source_path.name
        self.mime_type = mime_type or GuessMimeType(self.filename)

    def GetName(self) -> str:
        return self.filename

    def GetMimeType(self) -> str:
        return self.mime_type

    def GetSize(self) -> int:
        """
        Raises:
            FileReadFailed: If the staged file cannot be read
        """
        try:
            return self.source_path.stat().st_size
        except OSError as e:
            logger.error(f"Failed to read staged file {self.source_path}: {str(e)}")
            raise FileReadFailed(f"Failed to read the staged file: {self.source_path}") from e

    def SaveAs(self, path: Union[str, Path]) -> bool:
        if not self.source_path.is_file():
            logger.error(f"Staged file is missing: {self.source_path}")
            return False
        CopyFile(self.source_path, path)
        return True
