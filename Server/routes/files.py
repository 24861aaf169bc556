"""
FileDepot Server - File Endpoints

This module contains endpoints for uploading, listing, downloading and
deleting stored files, and for checking index/disk consistency.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, File as FastAPIFile, UploadFile, Form, Request
from fastapi.responses import FileResponse, Response

import database
from exceptions import FileDepotError, ValidationError, RecordNotFound
from file_manager import FileManager
from file_storage import FileExists
from models.api import FileMetadata, FileListResponse, FileDeleteResponse, ConsistencyReportResponse
from resources import UploadedFileResource


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


def GetFileManager() -> FileManager:
    """FastAPI dependency returning the shared FileManager"""
    if database.file_manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="File storage is not initialized"
        )
    return database.file_manager


def ToFileMetadata(file_manager: FileManager, model, request: Request) -> FileMetadata:
    """Build the API representation of a file model"""
    return FileMetadata(
        id=model.id,
        name=model.name,
        extension=model.extension,
        path=model.path,
        filename=model.filename,
        mime_type=model.mime_type,
        byte_size=model.byte_size,
        created_at=model.created_at,
        hash=model.hash,
        state=file_manager.GetFileState(model).value,
        url=file_manager.ResolveUrl(model, str(request.base_url))
    )


def LoadOr404(file_manager: FileManager, file_id: int):
    """Load a file model or raise a 404"""
    model = file_manager.LoadModel(file_id)
    if model is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File not found: {file_id}"
        )
    return model


# ==================== File Endpoints ====================

@router.post("/files", response_model=FileMetadata, status_code=status.HTTP_201_CREATED, tags=["Files"])
async def upload_file(
    request: Request,
    file: UploadFile = FastAPIFile(...),
    name: Optional[str] = Form(None, description="Name for the stored file, without extension"),
    path: Optional[str] = Form(None, description="Sub-directory within the files directory"),
    file_manager: FileManager = Depends(GetFileManager)
):
    """
    Upload and store a file

    Args:
        file: File to upload (multipart/form-data)
        name: Name for the file (defaults to the uploaded filename without extension)
        path: Sub-directory for the file

    Returns:
        FileMetadata of the stored file

    Raises:
        HTTPException: 400 if the metadata is invalid, 500 if storing fails
    """
    content = await file.read()
    resource = UploadedFileResource(file.filename or "unnamed", content, file.content_type)

    try:
        model = file_manager.SaveModel(resource, name=name, path=path)

    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except FileDepotError as e:
        logger.error(f"Error storing uploaded file '{resource.GetName()}': {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store file: {str(e)}"
        )

    return ToFileMetadata(file_manager, model, request)


@router.get("/files", response_model=FileListResponse, tags=["Files"])
async def list_files(
    request: Request,
    id: Optional[int] = Query(None),
    name: Optional[str] = Query(None),
    path: Optional[str] = Query(None),
    extension: Optional[str] = Query(None),
    filename: Optional[str] = Query(None),
    mime_type: Optional[str] = Query(None),
    byte_size: Optional[int] = Query(None),
    hash: Optional[str] = Query(None),
    created_at: Optional[str] = Query(None, description="Part of the creation time, e.g. 2024-05"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    order_by: Optional[str] = Query(None, description="Attribute to order by, '-' prefix for descending"),
    file_manager: FileManager = Depends(GetFileManager)
):
    """
    Search stored files

    Text filters and created_at match substrings, id and byte_size match exactly.
    """
    criteria = {
        'id': id, 'name': name, 'path': path, 'extension': extension,
        'filename': filename, 'mime_type': mime_type, 'byte_size': byte_size, 'hash': hash,
        'created_at': created_at
    }

    try:
        result = file_manager.SearchModels(criteria, page=page, page_size=page_size, order_by=order_by)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return FileListResponse(
        data=[ToFileMetadata(file_manager, model, request) for model in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_more=result.HasMore()
    )


@router.get("/files/consistency", response_model=ConsistencyReportResponse, tags=["Files"])
async def check_consistency(file_manager: FileManager = Depends(GetFileManager)):
    """
    Compare the file index with the files on disk

    Reports only; nothing is repaired.
    """
    report = file_manager.FindInconsistencies()
    return ConsistencyReportResponse(
        consistent=report.IsConsistent(),
        missing_files=report.missing_files,
        unverified_files=report.unverified_files,
        hash_mismatches=report.hash_mismatches,
        orphaned_files=report.orphaned_files
    )


@router.get("/files/{file_id}", response_model=FileMetadata, tags=["Files"])
async def get_file(
    file_id: int,
    request: Request,
    file_manager: FileManager = Depends(GetFileManager)
):
    """Get metadata of a stored file"""
    model = LoadOr404(file_manager, file_id)
    return ToFileMetadata(file_manager, model, request)


@router.get("/files/{file_id}/download", tags=["Files"])
async def download_file(
    file_id: int,
    file_manager: FileManager = Depends(GetFileManager)
):
    """
    Send a stored file to the client

    With use_x_sendfile enabled the body is left to the web server in front
    of the application, which serves the path given in the X-Sendfile header.

    Raises:
        HTTPException: 404 if the record or its file is missing
    """
    model = LoadOr404(file_manager, file_id)
    file_path = file_manager.ResolvePath(model)

    if not FileExists(file_path):
        logger.error(f"File record {file_id} has no file on disk: {file_path}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File content not found: {file_id}"
        )

    download_name = model.ResolveFilename()

    if file_manager.config.use_x_sendfile:
        return Response(
            status_code=status.HTTP_200_OK,
            media_type=model.mime_type,
            headers={
                "X-Sendfile": file_path,
                "Content-Disposition": f'attachment; filename="{download_name}"'
            }
        )

    return FileResponse(
        path=file_path,
        filename=download_name,
        media_type=model.mime_type
    )


@router.delete("/files/{file_id}", response_model=FileDeleteResponse, tags=["Files"])
async def delete_file(
    file_id: int,
    file_manager: FileManager = Depends(GetFileManager)
):
    """
    Delete a stored file and its record

    Raises:
        HTTPException: 404 if there is no such file, 500 if deleting fails
    """
    try:
        file_manager.DeleteModel(file_id)

    except RecordNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File not found: {file_id}"
        )
    except FileDepotError as e:
        logger.error(f"Error deleting file {file_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete file: {str(e)}"
        )

    return FileDeleteResponse(success=True, id=file_id)
