"""Tests for file access and sharing."""

from pathlib import Path

import pytest

from familydrive.exceptions import BlobNotFoundError
from familydrive.models import Role
from familydrive.results import ErrorKind
from familydrive.schemas.users import CreateUserRequest


@pytest.fixture
def kid_file(file_service):
    """A file uploaded by kid-001 (child of parent-001)."""
    return file_service.upload_file("drawing.png", "image/png", b"\x89PNG data", "kid-001").value


def accessible_ids(file_service, user_id):
    return {f.file_id for f in file_service.list_accessible_files(user_id).value}


class TestUploadFile:
    def test_upload_creates_owned_file(self, file_service, file_repo):
        result = file_service.upload_file("notes.txt", "text/plain", b"hello", "parent-001")

        assert result.is_ok
        file = result.value
        assert file.owner_id == "parent-001"
        assert file.uploader_id == "parent-001"
        assert file.size == 5
        assert file.content_type == "text/plain"
        assert file.shared_with == []
        assert file.sharing_history == []
        assert file.uploaded_at == file.last_modified
        assert file_repo.get_by_id(file.file_id) is not None

    def test_upload_writes_blob(self, file_service):
        file = file_service.upload_file("notes.txt", "text/plain", b"hello", "parent-001").value

        assert Path(file.storage_path).read_bytes() == b"hello"

    def test_missing_content_type_defaults(self, file_service):
        file = file_service.upload_file("blob.bin", None, b"\x00\x01", "kid-001").value

        assert file.content_type == "application/octet-stream"

    def test_empty_payload_rejected(self, file_service):
        result = file_service.upload_file("empty.txt", "text/plain", b"", "parent-001")

        assert result.kind == ErrorKind.INVALID_REQUEST

    def test_oversized_payload_rejected(self, file_service, file_repo, blob_storage, monkeypatch):
        monkeypatch.setattr("familydrive.config.MAX_UPLOAD_BYTES", 4)

        result = file_service.upload_file("big.bin", None, b"12345", "parent-001")

        assert result.kind == ErrorKind.INVALID_REQUEST
        assert file_repo.get_all_files() == []
        assert not blob_storage.root.exists() or list(blob_storage.root.iterdir()) == []

    def test_payload_at_limit_accepted(self, file_service, monkeypatch):
        monkeypatch.setattr("familydrive.config.MAX_UPLOAD_BYTES", 4)

        assert file_service.upload_file("fits.bin", None, b"1234", "parent-001").is_ok

    def test_unknown_uploader(self, file_service):
        result = file_service.upload_file("x.txt", "text/plain", b"x", "ghost")

        assert result.kind == ErrorKind.ACTOR_NOT_FOUND

    def test_each_upload_gets_new_id(self, file_service):
        first = file_service.upload_file("same.txt", "text/plain", b"1", "kid-001").value
        second = file_service.upload_file("same.txt", "text/plain", b"1", "kid-001").value

        assert first.file_id != second.file_id


class TestCanAccess:
    def test_owner_has_access(self, file_service, user_repo, kid_file):
        assert file_service.can_access(user_repo.get_by_user_id("kid-001"), kid_file)

    def test_admin_has_access(self, file_service, user_repo, kid_file):
        assert file_service.can_access(user_repo.get_by_user_id("admin-001"), kid_file)

    def test_parent_reaches_own_kids_files(self, file_service, user_repo, kid_file):
        assert file_service.can_access(user_repo.get_by_user_id("parent-001"), kid_file)

    def test_other_parent_has_no_access(self, file_service, user_repo, kid_file):
        assert not file_service.can_access(user_repo.get_by_user_id("parent-002"), kid_file)

    def test_sibling_has_no_access_until_shared(self, file_service, user_repo, kid_file):
        sibling = user_repo.get_by_user_id("kid-002")
        assert not file_service.can_access(sibling, kid_file)

        file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001")

        assert kid_file.file_id in accessible_ids(file_service, "kid-002")


class TestGetFileContent:
    def test_owner_downloads(self, file_service, kid_file):
        content = file_service.get_file_content(kid_file.file_id, "kid-001").value

        assert content.content == b"\x89PNG data"
        assert content.content_type == "image/png"
        assert content.file_name == "drawing.png"

    def test_error_order(self, file_service, kid_file):
        assert file_service.get_file_content("missing", "ghost").kind == ErrorKind.ACTOR_NOT_FOUND
        assert file_service.get_file_content("missing", "kid-001").kind == ErrorKind.NOT_FOUND
        assert file_service.get_file_content(kid_file.file_id, "parent-002").kind == ErrorKind.PERMISSION_DENIED

    def test_missing_blob_raises(self, file_service, kid_file):
        Path(kid_file.storage_path).unlink()

        with pytest.raises(BlobNotFoundError):
            file_service.get_file_content(kid_file.file_id, "kid-001")


class TestListAccessibleFiles:
    def test_filters_by_access(self, file_service, kid_file):
        other = file_service.upload_file("budget.xls", "application/vnd.ms-excel", b"123", "parent-002").value

        assert accessible_ids(file_service, "kid-001") == {kid_file.file_id}
        assert accessible_ids(file_service, "parent-001") == {kid_file.file_id}
        assert accessible_ids(file_service, "parent-002") == {other.file_id}
        assert accessible_ids(file_service, "admin-001") == {kid_file.file_id, other.file_id}
        assert accessible_ids(file_service, "kid-003") == set()

    def test_includes_sharing_history(self, file_service, kid_file):
        file_service.share_file(kid_file.file_id, ["kid-003"], "kid-001")

        files = file_service.list_accessible_files("kid-003").value

        assert len(files) == 1
        assert [(e.shared_by, e.shared_with) for e in files[0].sharing_history] == [("kid-001", "kid-003")]

    def test_unknown_requester(self, file_service):
        assert file_service.list_accessible_files("ghost").kind == ErrorKind.ACTOR_NOT_FOUND


class TestGetFileMetadata:
    def test_accessible_file(self, file_service, kid_file):
        assert file_service.get_file_metadata(kid_file.file_id, "parent-001").value.file_id == kid_file.file_id

    def test_inaccessible_file_reported_missing(self, file_service, kid_file):
        assert file_service.get_file_metadata(kid_file.file_id, "parent-002").kind == ErrorKind.NOT_FOUND

    def test_unknown_requester(self, file_service, kid_file):
        assert file_service.get_file_metadata(kid_file.file_id, "ghost").kind == ErrorKind.ACTOR_NOT_FOUND


class TestShareFile:
    def test_kid_shares_with_kid_of_other_family(self, file_service, kid_file):
        outcome = file_service.share_file(kid_file.file_id, ["kid-003"], "kid-001").value

        assert outcome.file_id == kid_file.file_id
        assert outcome.shared_with == ["kid-003"]
        assert kid_file.file_id in accessible_ids(file_service, "kid-003")

    def test_sharing_twice_is_idempotent_on_membership_only(self, file_service, file_repo, kid_file):
        file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001")
        file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001")

        stored = file_repo.get_by_id(kid_file.file_id)
        assert stored.shared_with == ["kid-002"]
        assert len(stored.sharing_history) == 2

    def test_invalid_and_denied_targets_dropped(self, file_service, file_repo, kid_file):
        outcome = file_service.share_file(
            kid_file.file_id, ["ghost", "parent-001", "admin-001", "kid-002"], "kid-001"
        ).value

        assert outcome.shared_with == ["kid-002"]
        stored = file_repo.get_by_id(kid_file.file_id)
        assert stored.shared_with == ["kid-002"]
        assert [e.shared_with for e in stored.sharing_history] == ["kid-002"]

    def test_nothing_saved_when_no_target_passes(self, file_service, file_repo, kid_file):
        outcome = file_service.share_file(kid_file.file_id, ["ghost", "parent-002"], "kid-001").value

        assert outcome.shared_with == []
        stored = file_repo.get_by_id(kid_file.file_id)
        assert stored.last_modified == kid_file.last_modified
        assert stored.sharing_history == []

    def test_last_modified_bumped_on_share(self, file_service, file_repo, kid_file):
        outcome = file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001").value

        stored = file_repo.get_by_id(kid_file.file_id)
        assert stored.last_modified == outcome.shared_at
        assert stored.sharing_history[0].shared_at == outcome.shared_at
        assert stored.sharing_history[0].parent_share_id is None

    def test_parent_shares_with_own_kid_and_parents(self, file_service):
        file = file_service.upload_file("plan.txt", "text/plain", b"plan", "parent-001").value

        outcome = file_service.share_file(
            file.file_id, ["kid-001", "kid-003", "parent-002", "admin-001"], "parent-001"
        ).value

        assert outcome.shared_with == ["kid-001", "parent-002"]

    def test_parent_may_share_kids_file(self, file_service, kid_file):
        outcome = file_service.share_file(kid_file.file_id, ["parent-002"], "parent-001").value

        assert outcome.shared_with == ["parent-002"]

    def test_recipient_can_reshare(self, file_service, file_repo, kid_file):
        file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001")

        outcome = file_service.share_file(kid_file.file_id, ["kid-003"], "kid-002").value

        assert outcome.shared_with == ["kid-003"]
        history = file_repo.get_by_id(kid_file.file_id).sharing_history
        assert [(e.shared_by, e.shared_with) for e in history] == [
            ("kid-001", "kid-002"),
            ("kid-002", "kid-003"),
        ]

    def test_admin_shares_with_anyone(self, file_service, kid_file):
        outcome = file_service.share_file(kid_file.file_id, ["parent-002", "admin-001"], "admin-001").value

        assert outcome.shared_with == ["parent-002", "admin-001"]

    def test_error_order(self, file_service, kid_file):
        assert file_service.share_file("missing", ["kid-002"], "ghost").kind == ErrorKind.ACTOR_NOT_FOUND
        assert file_service.share_file("missing", ["kid-002"], "kid-001").kind == ErrorKind.NOT_FOUND
        assert file_service.share_file(kid_file.file_id, ["kid-002"], "kid-003").kind == ErrorKind.PERMISSION_DENIED

    def test_access_persists_after_more_shares(self, file_service, kid_file):
        file_service.share_file(kid_file.file_id, ["kid-002"], "kid-001")
        file_service.share_file(kid_file.file_id, ["kid-003"], "kid-001")

        assert kid_file.file_id in accessible_ids(file_service, "kid-002")


def test_end_to_end_family_scenario(user_service, file_service, user_repo):
    admin = "admin-001"

    parent = user_service.create_user(
        CreateUserRequest(username="parentP", display_name="Parent P", role=Role.PARENT), admin
    )
    assert parent.is_ok and parent.value.parent_id is None
    p_id = parent.value.user_id

    p2_id = user_service.create_user(
        CreateUserRequest(username="parentP2", display_name="Parent P2", role=Role.PARENT), admin
    ).value.user_id
    p3_id = user_service.create_user(
        CreateUserRequest(username="parentP3", display_name="Parent P3", role=Role.PARENT), admin
    ).value.user_id

    kid = user_service.create_user(
        CreateUserRequest(username="kidK", display_name="Kid K", role=Role.KID, parent_id=p_id), p_id
    )
    assert kid.is_ok
    k_id = kid.value.user_id

    k2_id = user_service.create_user(
        CreateUserRequest(username="kidK2", display_name="Kid K2", role=Role.KID, parent_id=p2_id), p2_id
    ).value.user_id

    assert user_service.create_user(
        CreateUserRequest(username="kidKK", display_name="Kid of kid", role=Role.KID, parent_id=p_id), k_id
    ).kind == ErrorKind.PERMISSION_DENIED

    assert user_service.create_user(
        CreateUserRequest(username="kidK9", display_name="Kid K9", role=Role.KID, parent_id=p_id), p2_id
    ).kind == ErrorKind.PERMISSION_DENIED

    listed = {u.user_id for u in user_service.list_visible_users(admin).value}
    assert {admin, p_id, p2_id, k_id} <= listed

    file = file_service.upload_file("secret.txt", "text/plain", b"kid stuff", k_id).value
    assert file_service.share_file(file.file_id, [k2_id], k_id).value.shared_with == [k2_id]

    assert file_service.can_access(user_repo.get_by_user_id(k2_id), file_service.file_repo.get_by_id(file.file_id))
    assert not file_service.can_access(user_repo.get_by_user_id(p3_id), file_service.file_repo.get_by_id(file.file_id))
