"""In-memory repositories.

Records are deep-copied on the way in and out so that callers observe the same
snapshot semantics as with the SQLite repositories.
"""

import copy
import threading
from typing import Dict, List, Optional

from familydrive.database import username_key
from familydrive.models import FileEntity, User


class InMemoryUserRepository:
    def __init__(self, users: Optional[List[User]] = None):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        for user in users or []:
            self.save_user(user)

    def get_all_users(self) -> List[User]:
        with self._lock:
            return [copy.deepcopy(user) for user in self._users.values()]

    def get_by_user_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return copy.deepcopy(user) if user is not None else None

    def get_by_username(self, username: str) -> Optional[User]:
        wanted = username_key(username)
        with self._lock:
            for user in self._users.values():
                if username_key(user.username) == wanted:
                    return copy.deepcopy(user)
        return None

    def save_user(self, user: User) -> None:
        with self._lock:
            self._users[user.user_id] = copy.deepcopy(user)

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)


class InMemoryFileRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._files: Dict[str, FileEntity] = {}

    def get_all_files(self) -> List[FileEntity]:
        with self._lock:
            return [copy.deepcopy(file) for file in self._files.values()]

    def get_by_id(self, file_id: str) -> Optional[FileEntity]:
        with self._lock:
            file = self._files.get(file_id)
            return copy.deepcopy(file) if file is not None else None

    def save_file(self, file: FileEntity) -> None:
        stored = copy.deepcopy(file)
        with self._lock:
            existing = self._files.get(file.file_id)
            if existing is not None:
                known = {entry.entry_id for entry in stored.sharing_history}
                kept = [entry for entry in existing.sharing_history if entry.entry_id not in known]
                stored.sharing_history = kept + stored.sharing_history
            self._files[file.file_id] = stored

    def delete_file(self, file_id: str) -> None:
        with self._lock:
            self._files.pop(file_id, None)
