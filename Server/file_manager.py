"""
FileDepot Server - File Manager

This module ties the metadata index and the filesystem together:
- Saving resources (row first, then bytes, then checksum)
- Loading, searching and reading stored files
- Deleting stored files (file first, then row)
- Resolving files to paths and urls
- Detecting rows and files that went out of sync

Failures are never rolled back automatically. Each failed step leaves a state
that points back at it: a row without a file means the directory or write step
failed, a row with a file but no hash means the checksum step failed. A row
delete that fails after its file was removed is logged with the record id.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from exceptions import (
    DirectoryCreateFailed, FileWriteFailed, InvalidModelClassError,
    ModelPersistError, RecordNotFound, RecordDeleteFailed
)
from file_storage import (
    CreateDirectory, DeleteDirectory, FileExists, WriteResource, RemoveFile,
    ReadFile, ListStoredFiles, CalculateFileHash
)
from managers.database_manager import DatabaseManager
from managers.record_store import (
    InsertRecord, FindRecordById, UpdateRecordFields, DeleteRecord,
    SearchRecords, IterateRecords, DEFAULT_PAGE_SIZE
)
from models.database import Base, File
from models.infrastructure import (
    StorageConfig, FileState, InconsistencyReport, SearchResult, FILE_RECORD_ATTRIBUTES
)
from normalizer import NormalizeFilename
from path_resolver import BuildBasePath, BuildBaseUrl
from resources import FileResource

logger = logging.getLogger(__name__)


def ValidateModelClass(model_class) -> type:
    """
    Check that a class can be used as the file model

    Args:
        model_class: Candidate model class

    Returns:
        type: The model class

    Raises:
        InvalidModelClassError: If the class is not a mapped model exposing
                                every file record attribute
    """
    if not isinstance(model_class, type) or not issubclass(model_class, Base):
        raise InvalidModelClassError(
            f"Model class \"{getattr(model_class, '__name__', model_class)}\" must be a database model"
        )

    missing = [attribute for attribute in FILE_RECORD_ATTRIBUTES if not hasattr(model_class, attribute)]
    if missing:
        raise InvalidModelClassError(
            f"Model class \"{model_class.__name__}\" is missing attributes: {', '.join(missing)}"
        )

    for method in ('Validate', 'ResolveFilename', 'GetPath', 'ResolvePath', 'ResolveUrl'):
        if not callable(getattr(model_class, method, None)):
            raise InvalidModelClassError(
                f"Model class \"{model_class.__name__}\" must implement {method}()"
            )

    return model_class


class FileManager:
    """
    Manages stored files and their metadata records
    """

    def __init__(self, db_manager: DatabaseManager, config: Optional[StorageConfig] = None,
                 hash_chunk_size: int = 8192):
        """
        Initialize file manager

        Args:
            db_manager: DatabaseManager holding the file table
            config: Storage configuration (defaults to StorageConfig())
            hash_chunk_size: Bytes read per chunk when hashing

        Raises:
            InvalidModelClassError: If config.model_class cannot be used
        """
        self.db_manager = db_manager
        self.config = config or StorageConfig()
        self.model_class = ValidateModelClass(self.config.model_class or File)
        self.hash_chunk_size = hash_chunk_size

        # Resolved once; the configuration never changes for this manager
        self._base_path = BuildBasePath(self.config, absolute=False)
        self._absolute_base_path = BuildBasePath(self.config, absolute=True)

    # ==================== Base Paths ====================

    def GetBasePath(self, absolute: bool = False) -> str:
        """
        Returns the path to the files directory

        Args:
            absolute: Whether to return an absolute path

        Returns:
            str: The path
        """
        return self._absolute_base_path if absolute else self._base_path

    def GetBaseUrl(self, absolute: bool = False, request_base_url: Optional[str] = None) -> str:
        """
        Returns the url to the files directory

        Args:
            absolute: Whether to prefix the base url
            request_base_url: Base url of the current request, used when no
                              base_url is configured

        Returns:
            str: The url
        """
        return BuildBaseUrl(self.config, absolute, request_base_url)

    def ResolvePath(self, model) -> str:
        """Returns the absolute path of a stored file"""
        return model.ResolvePath(self.GetBasePath(absolute=True))

    def ResolveUrl(self, model, request_base_url: Optional[str] = None) -> str:
        """Returns the url of a stored file"""
        return model.ResolveUrl(self.GetBaseUrl(absolute=True, request_base_url=request_base_url))

    def NormalizeFilename(self, name: str) -> str:
        """Normalizes the given filename by removing illegal characters"""
        return NormalizeFilename(name)

    def DeleteDirectory(self, path: str) -> bool:
        """
        Deletes an empty sub-directory of the files directory

        Args:
            path: Directory path relative to the files directory

        Returns:
            bool: Whether the directory was deleted
        """
        return DeleteDirectory(f"{self.GetBasePath(absolute=True)}/{path.strip('/')}")

    # ==================== Save ====================

    def CreateModel(self, scenario: str = "insert"):
        """
        Creates an empty file model

        Args:
            scenario: Validation scenario of the model

        Returns:
            A new instance of the configured model class
        """
        model = self.model_class()
        model.scenario = scenario
        return model

    def SaveModel(self, resource: FileResource, name: Optional[str] = None,
                  path: Optional[str] = None, scenario: str = "insert"):
        """
        Saves the given resource both in the database and on the disk

        Args:
            resource: The file resource
            name: New name for the file (defaults to the original filename
                  without its extension)
            path: Sub-directory relative to the files directory
            scenario: Validation scenario of the model

        Returns:
            The saved model, with its hash stamped

        Raises:
            ValidationError: If the metadata is invalid (nothing was written)
            ModelPersistError: If the database rejects the record
            DirectoryCreateFailed: If the target directory cannot be created
            FileWriteFailed: If the bytes cannot be written
            FileReadFailed: If the written file cannot be hashed
        """
        model = self.CreateModel(scenario)
        model.extension = resource.GetExtension().lower()
        model.filename = resource.GetName()
        model.mime_type = resource.GetMimeType()
        model.byte_size = resource.GetSize()
        # Stored as naive UTC; the column carries no timezone
        model.created_at = datetime.now(timezone.utc).replace(tzinfo=None)

        if name is None:
            filename = model.filename
            name = filename[:filename.rindex('.')] if '.' in filename else filename
        model.name = self.NormalizeFilename(name)

        if path is not None:
            model.path = path.strip('/') or None

        # Nothing has touched the disk if this fails
        InsertRecord(self.db_manager, model)
        logger.info(f"Created file record {model.id} for '{model.filename}'")

        directory = f"{self.GetBasePath(absolute=True)}/{model.GetPath()}"
        try:
            CreateDirectory(directory)
            file_path = directory + model.ResolveFilename()
            WriteResource(resource, file_path)
        except (DirectoryCreateFailed, FileWriteFailed):
            logger.error(f"File record {model.id} has no file on disk, save aborted")
            raise

        file_hash = CalculateFileHash(file_path, self.hash_chunk_size)
        if not UpdateRecordFields(self.db_manager, self.model_class, model.id, {'hash': file_hash}):
            logger.error(f"File record {model.id} disappeared before its hash was stored")
            raise ModelPersistError(f"Failed to store the hash of file model {model.id}")
        model.hash = file_hash

        logger.info(
            f"Saved file {model.id} to {file_path} "
            f"(size: {model.byte_size} bytes, hash: {file_hash[:16]}...)"
        )
        return model

    # ==================== Load ====================

    def LoadModel(self, model_id, with_: Optional[Iterable[str]] = None):
        """
        Returns the file with the given id

        Args:
            model_id: The model id
            with_: Related models that should be eager-loaded

        Returns:
            The model, or None if there is no file with that id
        """
        return FindRecordById(self.db_manager, self.model_class, model_id, with_)

    def SearchModels(self, criteria: Optional[Dict[str, Any]] = None, page: int = 1,
                     page_size: int = DEFAULT_PAGE_SIZE, order_by: Optional[str] = None) -> SearchResult:
        """
        Returns the files matching the given criteria

        See managers.record_store.SearchRecords for the matching rules.
        """
        return SearchRecords(self.db_manager, self.model_class, criteria, page, page_size, order_by)

    def GetFileContents(self, model) -> bytes:
        """
        Returns the contents of a stored file

        Raises:
            FileReadFailed: If the file cannot be read
        """
        return ReadFile(self.ResolvePath(model))

    # ==================== Delete ====================

    def DeleteModel(self, model_id) -> bool:
        """
        Deletes a file with the given id

        The file is removed before the record. A file that cannot be removed
        keeps its record.

        Args:
            model_id: The file id

        Returns:
            bool: True once both the file and the record are gone

        Raises:
            RecordNotFound: If there is no file with that id
            FileDeleteFailed: If the file exists and cannot be removed
            RecordDeleteFailed: If the record cannot be removed
        """
        model = self.LoadModel(model_id)
        if model is None:
            raise RecordNotFound(model_id)

        file_path = self.ResolvePath(model)
        if FileExists(file_path):
            RemoveFile(file_path)
        else:
            logger.warning(f"File of record {model_id} was already missing: {file_path}")

        try:
            deleted = DeleteRecord(self.db_manager, self.model_class, model_id)
        except SQLAlchemyError as e:
            logger.error(f"File {file_path} was removed but record {model_id} could not be deleted")
            raise RecordDeleteFailed("Failed to delete the file model.") from e

        if not deleted:
            logger.error(f"File {file_path} was removed but record {model_id} was gone before its delete")
            raise RecordDeleteFailed("Failed to delete the file model.")

        logger.info(f"Deleted file {model_id}")
        return True

    # ==================== Consistency ====================

    def GetFileState(self, model) -> FileState:
        """
        Returns how far the save of a record got

        Args:
            model: File model

        Returns:
            FileState: VERIFIED if the hash is stamped, WRITTEN if only the
                       bytes exist, PENDING if neither
        """
        if model.hash:
            return FileState.VERIFIED
        if FileExists(self.ResolvePath(model)):
            return FileState.WRITTEN
        return FileState.PENDING

    def VerifyModel(self, model) -> bool:
        """
        Check that a stored file still matches its recorded hash

        Returns:
            bool: True if the file exists and its hash equals the stored one
        """
        file_path = self.ResolvePath(model)
        if not model.hash or not FileExists(file_path):
            return False
        return CalculateFileHash(file_path, self.hash_chunk_size) == model.hash

    def FindInconsistencies(self) -> InconsistencyReport:
        """
        Compare every file record with the files directory

        Only reports; nothing is repaired.

        Returns:
            InconsistencyReport
        """
        report = InconsistencyReport()
        expected_files = set()

        for model in IterateRecords(self.db_manager, self.model_class):
            expected_files.add(model.ResolveInternalPath())
            file_path = self.ResolvePath(model)

            if not FileExists(file_path):
                report.missing_files.append(model.id)
            elif not model.hash:
                report.unverified_files.append(model.id)
            elif CalculateFileHash(file_path, self.hash_chunk_size) != model.hash:
                report.hash_mismatches.append(model.id)

        stored_files = ListStoredFiles(self.GetBasePath(absolute=True))
        report.orphaned_files = [f for f in stored_files if f not in expected_files]

        logger.info(
            f"Consistency check: {len(report.missing_files)} missing, "
            f"{len(report.unverified_files)} unverified, {len(report.hash_mismatches)} mismatched, "
            f"{len(report.orphaned_files)} orphaned"
        )
        return report
