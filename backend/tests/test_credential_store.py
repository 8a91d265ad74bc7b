import pytest

from statusboard.auth import verify_password
from statusboard.errors import DuplicateKey
from statusboard.services.credential_store import SqlCredentialStore


def test_create_stores_only_hash(credential_store: SqlCredentialStore):
    user = credential_store.create("alice", "pw", "staff")
    assert user.id is not None
    assert user.password_hash != "pw"
    assert verify_password("pw", user.password_hash)


def test_default_role_is_staff(credential_store: SqlCredentialStore):
    assert credential_store.create("bob", "pw").role == "staff"


def test_unknown_role_rejected(credential_store: SqlCredentialStore):
    with pytest.raises(ValueError):
        credential_store.create("carol", "pw", "root")
    assert credential_store.find_by_username("carol") is None


def test_duplicate_username_leaves_original(credential_store: SqlCredentialStore):
    original = credential_store.create("alice", "first", "staff")
    with pytest.raises(DuplicateKey):
        credential_store.create("alice", "second", "admin")

    users = [u for u in credential_store.list_all() if u.username == "alice"]
    assert len(users) == 1
    assert users[0].id == original.id
    assert users[0].role == "staff"
    assert verify_password("first", users[0].password_hash)


def test_find_by_id_and_username(credential_store: SqlCredentialStore):
    user = credential_store.create("dave", "pw")
    assert credential_store.find_by_id(user.id).username == "dave"
    assert credential_store.find_by_username("dave").id == user.id
    assert credential_store.find_by_id(99999) is None
    assert credential_store.find_by_username("nobody") is None


def test_delete_removes_user(credential_store: SqlCredentialStore):
    user = credential_store.create("erin", "pw")
    assert credential_store.delete(user.id) is True
    assert credential_store.find_by_username("erin") is None


def test_delete_admin_is_noop(credential_store: SqlCredentialStore):
    admin = credential_store.find_by_username("admin")
    assert credential_store.delete(admin.id) is False
    assert credential_store.find_by_username("admin") is not None


def test_delete_nonexistent_is_noop(credential_store: SqlCredentialStore):
    assert credential_store.delete(99999) is False


def test_list_all_in_insertion_order(credential_store: SqlCredentialStore):
    credential_store.create("first", "pw")
    credential_store.create("second", "pw")
    names = [u.username for u in credential_store.list_all()]
    assert names == ["admin", "first", "second"]
