from registry_api.services import permissions

ENTRY = {"id": "weather", "primaryOwnerId": "alice", "ownerIds": ["bob"]}
VERSION = {"id": "v1", "entryId": "weather", "publisherId": "alice"}


def test_owners_may_update_entry():
    assert permissions.can_update_entry(ENTRY, "alice")
    assert permissions.can_update_entry(ENTRY, "bob")
    assert not permissions.can_update_entry(ENTRY, "mallory")
    assert not permissions.can_update_entry(ENTRY, None)


def test_only_primary_owner_deletes_and_publishes():
    assert permissions.can_delete_entry(ENTRY, "alice")
    assert not permissions.can_delete_entry(ENTRY, "bob")
    assert permissions.can_create_version(ENTRY, "alice")
    assert not permissions.can_create_version(ENTRY, "bob")


def test_version_update_requires_publisher_and_primary_owner():
    assert permissions.can_update_version(ENTRY, VERSION, "alice")
    # a co-owner who did not publish
    assert not permissions.can_update_version(ENTRY, VERSION, "bob")
    # a publisher who is no longer primary owner
    transferred = {**ENTRY, "primaryOwnerId": "bob", "ownerIds": ["alice"]}
    assert not permissions.can_update_version(transferred, VERSION, "alice")
    assert not permissions.can_update_version(ENTRY, VERSION, None)


def test_default_version_must_belong_to_entry():
    assert permissions.can_set_default_version(ENTRY, "bob", VERSION)
    assert not permissions.can_set_default_version(ENTRY, "bob", None)
    assert not permissions.can_set_default_version(ENTRY, "bob", {**VERSION, "entryId": "other"})
    assert not permissions.can_set_default_version(ENTRY, "mallory", VERSION)


def test_moderation_gates():
    assert permissions.can_verify_entry(is_admin=True)
    assert not permissions.can_verify_entry(is_admin=False)
    assert permissions.can_deprecate_entry(ENTRY, "mallory", is_admin=True)
    assert permissions.can_deprecate_entry(ENTRY, "bob")
    assert not permissions.can_deprecate_entry(ENTRY, "mallory")
    assert permissions.can_transfer_entry(ENTRY, "mallory", is_admin=True)
    assert not permissions.can_transfer_entry(ENTRY, "bob")


def test_account_deletion_requires_no_owned_entries():
    assert permissions.can_delete_account("alice", "alice", primary_entry_count=0)
    assert not permissions.can_delete_account("alice", "alice", primary_entry_count=2)
    assert not permissions.can_delete_account("alice", "bob", primary_entry_count=0)


def test_tokens_are_managed_by_their_holder_only():
    assert permissions.can_manage_tokens("alice", "alice")
    assert not permissions.can_manage_tokens("alice", "bob")
    assert not permissions.can_manage_tokens("alice", None)
