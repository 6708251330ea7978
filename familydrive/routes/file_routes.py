"""File operation API routes."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from familydrive.auth import get_current_user
from familydrive import config
from familydrive.config import API_PREFIX
from familydrive.schemas.files import (
    FileMetadataResponse,
    FilesListResponse,
    ShareFileRequest,
    ShareFileResponse,
    UploadFileResponse
)
from familydrive.service_locator import get_file_service
from familydrive.services.file_service import FileService

router = APIRouter(prefix=f"{API_PREFIX}/files", tags=["Files"])


def _content_disposition(file_name: str) -> str:
    ascii_name = file_name.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(file_name)}"


@router.post("/upload", response_model=UploadFileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    response: Response,
    file: UploadFile = File(...),
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Upload a new file owned by the acting user.

    Parameters:
        - file: File to upload (multipart/form-data)
        - X-User-ID header: acting user (required)

    Returns:
        - file_id, file_name, size, content_type, uploaded_at

    Raises:
        - 400: Empty file or file larger than MAX_UPLOAD_BYTES
        - 401: Missing X-User-ID header
        - 403: Acting user unknown
    """
    # One byte past the limit is enough for the size check.
    content = await file.read(config.MAX_UPLOAD_BYTES + 1)

    uploaded = file_service.upload_file(
        file_name=file.filename or "upload",
        content_type=file.content_type,
        data=content,
        uploader_id=current_user,
    ).unwrap()

    response.headers["Location"] = f"{API_PREFIX}/files/{uploaded.file_id}"
    return UploadFileResponse(
        file_id=uploaded.file_id,
        file_name=uploaded.file_name,
        size=uploaded.size,
        content_type=uploaded.content_type,
        uploaded_at=uploaded.uploaded_at,
    )


@router.get("", response_model=FilesListResponse)
def list_files(
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    List every file the acting user can access, with sharing history.
    """
    files = file_service.list_accessible_files(current_user).unwrap()
    return FilesListResponse(
        files=[FileMetadataResponse.from_file(file) for file in files],
        total_count=len(files),
    )


@router.get("/{file_id}/download")
def download_file(
    file_id: str,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Download a file the acting user can access.

    Raises:
        - 403: Acting user unknown or without access
        - 404: File not found
    """
    file_content = file_service.get_file_content(file_id, current_user).unwrap()

    return Response(
        content=file_content.content,
        media_type=file_content.content_type,
        headers={"Content-Disposition": _content_disposition(file_content.file_name)},
    )


@router.get("/{file_id}", response_model=FileMetadataResponse)
def get_file_metadata(
    file_id: str,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Get metadata for a file, including its sharing history.

    Files the acting user cannot access are reported as 404.
    """
    file = file_service.get_file_metadata(file_id, current_user).unwrap()
    return FileMetadataResponse.from_file(file)


@router.post("/{file_id}/share", response_model=ShareFileResponse)
def share_file(
    file_id: str,
    request: ShareFileRequest,
    current_user: str = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Share a file with other users.

    Parents can share with their Kids and other Parents, Kids with other Kids,
    Admins with anyone. Targets that are unknown or not allowed are skipped;
    only the accepted ids are returned.

    Raises:
        - 403: Acting user unknown or without access to the file
        - 404: File not found
    """
    outcome = file_service.share_file(file_id, request.user_ids, current_user).unwrap()
    return ShareFileResponse.from_outcome(outcome)
