"""
FileDepot Server - File Database Model

File model for tracking stored file metadata.
The physical file lives at <base path>/<path>/<name>-<id>.<extension>.
"""

from typing import List, Optional
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Index

from models.database.base import Base
import path_resolver


# Maximum length of string columns
MAX_STRING_LENGTH = 255

# Maximum number of digits in byte_size
MAX_BYTE_SIZE_DIGITS = 10


class File(Base):
    """
    File table - one row per stored file
    """
    __tablename__ = "file"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(MAX_STRING_LENGTH), nullable=False)  # Normalized name without extension
    extension = Column(String(MAX_STRING_LENGTH), nullable=False)  # Lowercase, no leading dot
    path = Column(String(MAX_STRING_LENGTH), nullable=True)  # Sub-directory, no leading/trailing slash
    filename = Column(String(MAX_STRING_LENGTH), nullable=False)  # Original filename
    mime_type = Column("mimeType", String(MAX_STRING_LENGTH), nullable=False)
    byte_size = Column("byteSize", BigInteger, nullable=False)
    created_at = Column("createdAt", DateTime, nullable=False)
    hash = Column(String(MAX_STRING_LENGTH), nullable=True)  # SHA-256, NULL until stamped

    # Validation scenario, not a column. File ignores it; subclasses may vary
    # their Validate() rules by it.
    scenario = "insert"

    __table_args__ = (
        Index('idx_file_name', 'name'),
        # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
        {"sqlite_autoincrement": True}
    )

    def __repr__(self) -> str:
        return f"<File id={self.id} name={self.name!r} extension={self.extension!r}>"

    # ==================== Validation ====================

    def Validate(self) -> List[str]:
        """
        Validate attributes before the record is inserted

        Returns:
            List[str]: Validation error messages (empty if valid)
        """
        errors = []

        for attribute in ('name', 'extension', 'filename', 'mime_type', 'created_at'):
            value = getattr(self, attribute)
            if value is None or value == "":
                errors.append(f"{attribute} cannot be blank")

        for attribute in ('name', 'path', 'extension', 'filename', 'mime_type'):
            value = getattr(self, attribute)
            if value is not None and len(value) > MAX_STRING_LENGTH:
                errors.append(f"{attribute} is too long (maximum is {MAX_STRING_LENGTH} characters)")

        if self.path and ('\\' in self.path or '..' in self.path.split('/')):
            errors.append("path cannot leave the files directory")

        if self.byte_size is None:
            errors.append("byte_size cannot be blank")
        elif self.byte_size < 0:
            errors.append("byte_size cannot be negative")
        elif len(str(self.byte_size)) > MAX_BYTE_SIZE_DIGITS:
            errors.append(f"byte_size is too long (maximum is {MAX_BYTE_SIZE_DIGITS} digits)")

        return errors

    # ==================== Path Resolution ====================

    def ResolveFilename(self, extension: Optional[str] = None) -> str:
        """
        Returns the full filename for this file

        Args:
            extension: Extension to use instead of the stored one

        Returns:
            str: Filename in the form <name>-<id>.<extension>
        """
        return path_resolver.ResolveFilename(self, extension)

    def GetPath(self) -> str:
        """Returns the sub-directory of this file with a trailing slash, or ''"""
        return path_resolver.GetInternalPath(self)

    def ResolveInternalPath(self) -> str:
        """Returns the path of this file relative to the files directory"""
        return path_resolver.ResolveRelativePath(self)

    def ResolvePath(self, base_path: str) -> str:
        """Returns the path of this file under the given files directory"""
        return path_resolver.ResolveAbsolutePath(self, base_path)

    def ResolveUrl(self, base_url: str) -> str:
        """Returns the url of this file under the given files url"""
        return path_resolver.ResolveUrl(self, base_url)
