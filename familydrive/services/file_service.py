"""File access and sharing service."""

from typing import Dict, List, Optional

from common.logging_config import get_logger
from familydrive import config
from familydrive.models import FileContent, FileEntity, Role, ShareOutcome, SharingHistoryEntry, User
from familydrive.policies import can_share_with
from familydrive.repositories.file_repository import FileRepository
from familydrive.repositories.protocols import FileStore, UserStore
from familydrive.repositories.user_repository import UserRepository
from familydrive.results import Err, ErrorKind, Ok, Result
from familydrive.storage import LocalBlobStorage
from familydrive.utils import generate_uuid, utcnow

logger = get_logger(__name__)


class FileService:
    def __init__(
        self,
        user_repo: Optional[UserStore] = None,
        file_repo: Optional[FileStore] = None,
        blob_storage: Optional[LocalBlobStorage] = None,
    ):
        self.user_repo = user_repo if user_repo is not None else UserRepository()
        self.file_repo = file_repo if file_repo is not None else FileRepository()
        self.blob_storage = blob_storage if blob_storage is not None else LocalBlobStorage()

    def can_access(
        self,
        user: User,
        file: FileEntity,
        users_by_id: Optional[Dict[str, User]] = None,
    ) -> bool:
        """
        Check whether user may read file.

        Owners, users the file was shared with and Admins always have access.
        Parents additionally reach every file owned by one of their Kids.

        Args:
            user: Requesting user
            file: File to check
            users_by_id: Optional preloaded users, avoids a lookup per file when filtering lists

        Returns:
            True if access is allowed
        """
        if file.owner_id == user.user_id:
            return True

        if user.user_id in file.shared_with:
            return True

        if user.role == Role.ADMIN:
            return True

        if user.role == Role.PARENT:
            if users_by_id is not None:
                owner = users_by_id.get(file.owner_id)
            else:
                owner = self.user_repo.get_by_user_id(file.owner_id)
            if owner is not None and owner.role == Role.KID and owner.parent_id == user.user_id:
                return True

        return False

    def upload_file(
        self,
        file_name: str,
        content_type: Optional[str],
        data: bytes,
        uploader_id: str,
    ) -> Result[FileEntity]:
        uploader = self.user_repo.get_by_user_id(uploader_id)
        if uploader is None:
            logger.warning(f"Upload failed: uploader not found [uploader_id={uploader_id}]")
            return Err(ErrorKind.ACTOR_NOT_FOUND, "Uploader user not found")

        if not data:
            return Err(ErrorKind.INVALID_REQUEST, "No file provided")

        if len(data) > config.MAX_UPLOAD_BYTES:
            logger.warning(f"Upload rejected: payload exceeds {config.MAX_UPLOAD_BYTES} bytes [uploader_id={uploader_id}]")
            return Err(
                ErrorKind.INVALID_REQUEST,
                f"File exceeds the maximum upload size of {config.MAX_UPLOAD_BYTES} bytes",
            )

        file_id = generate_uuid()
        storage_path = self.blob_storage.save(file_id, file_name, data)
        now = utcnow()

        file = FileEntity(
            file_id=file_id,
            file_name=file_name,
            content_type=content_type or config.DEFAULT_CONTENT_TYPE,
            size=len(data),
            uploader_id=uploader_id,
            owner_id=uploader_id,
            uploaded_at=now,
            last_modified=now,
            storage_path=storage_path,
        )

        try:
            self.file_repo.save_file(file)
        except Exception as e:
            logger.error(f"Upload failed for file {file_id}, removing stored bytes: {e}")
            self.blob_storage.delete(storage_path)
            raise

        logger.info(f"Uploaded file '{file_name}' ({file.size} bytes) [file_id={file_id}] [owner_id={uploader_id}]")
        return Ok(file)

    def get_file_content(self, file_id: str, requester_id: str) -> Result[FileContent]:
        user = self.user_repo.get_by_user_id(requester_id)
        if user is None:
            return Err(ErrorKind.ACTOR_NOT_FOUND, "User not found")

        file = self.file_repo.get_by_id(file_id)
        if file is None:
            return Err(ErrorKind.NOT_FOUND, f"File {file_id} not found")

        if not self.can_access(user, file):
            logger.warning(f"Download denied: {requester_id} cannot access file {file_id}")
            return Err(ErrorKind.PERMISSION_DENIED, "Access denied to this file")

        content = self.blob_storage.read(file.storage_path)
        return Ok(FileContent(content=content, content_type=file.content_type, file_name=file.file_name))

    def list_accessible_files(self, requester_id: str) -> Result[List[FileEntity]]:
        user = self.user_repo.get_by_user_id(requester_id)
        if user is None:
            return Err(ErrorKind.ACTOR_NOT_FOUND, "User not found")

        users_by_id = None
        if user.role == Role.PARENT:
            users_by_id = {candidate.user_id: candidate for candidate in self.user_repo.get_all_users()}

        files = [
            file for file in self.file_repo.get_all_files()
            if self.can_access(user, file, users_by_id)
        ]
        logger.debug(f"{len(files)} files accessible to {requester_id}")
        return Ok(files)

    def get_file_metadata(self, file_id: str, requester_id: str) -> Result[FileEntity]:
        """
        Fetch metadata of a single file.

        Files the requester cannot access are reported as not found, so the
        existence of other users' files is not revealed.
        """
        user = self.user_repo.get_by_user_id(requester_id)
        if user is None:
            return Err(ErrorKind.ACTOR_NOT_FOUND, "User not found")

        file = self.file_repo.get_by_id(file_id)
        if file is None or not self.can_access(user, file):
            return Err(ErrorKind.NOT_FOUND, f"File {file_id} not found")

        return Ok(file)

    def share_file(self, file_id: str, target_user_ids: List[str], sharer_id: str) -> Result[ShareOutcome]:
        """
        Share a file with a list of users.

        Anyone with access to the file may share it. Unknown target ids and
        targets the sharer's role may not share with are skipped without error.
        Every accepted target gets a history entry, even when the file was
        already shared with them.
        """
        sharer = self.user_repo.get_by_user_id(sharer_id)
        if sharer is None:
            logger.warning(f"Share failed: sharer not found [sharer_id={sharer_id}]")
            return Err(ErrorKind.ACTOR_NOT_FOUND, "Sharer user not found")

        file = self.file_repo.get_by_id(file_id)
        if file is None:
            return Err(ErrorKind.NOT_FOUND, f"File {file_id} not found")

        if not self.can_access(sharer, file):
            logger.warning(f"Share denied: {sharer_id} cannot access file {file_id}")
            return Err(ErrorKind.PERMISSION_DENIED, "Access denied to this file")

        shared_at = utcnow()
        accepted: List[str] = []

        for target_id in target_user_ids:
            target = self.user_repo.get_by_user_id(target_id)
            if target is None:
                logger.debug(f"Share target skipped, unknown user [target_id={target_id}]")
                continue

            if not can_share_with(sharer, target):
                logger.debug(
                    f"Share target skipped, {sharer.role.value} cannot share with {target.role.value} "
                    f"[target_id={target_id}]"
                )
                continue

            accepted.append(target_id)
            if target_id not in file.shared_with:
                file.shared_with.append(target_id)

            file.sharing_history.append(SharingHistoryEntry(
                entry_id=generate_uuid(),
                shared_by=sharer_id,
                shared_with=target_id,
                shared_at=shared_at,
            ))

        if accepted:
            file.last_modified = shared_at
            self.file_repo.save_file(file)
            logger.info(f"File {file_id} shared by {sharer_id} with {len(accepted)} users")
        else:
            logger.info(f"File {file_id} share request by {sharer_id} matched no valid targets")

        return Ok(ShareOutcome(file_id=file_id, shared_with=accepted, shared_at=shared_at))
