import pytest

from vhr.utils.role_permissions import (
    DEFAULT_PERMISSIONS,
    PERMISSION_MODULES,
    PermissionLevel,
    effective_level,
    get_default_permissions,
    remove_custom_permission,
    upsert_custom_permission,
    validate_level,
    validate_role,
)


class TestDefaultPermissions:
    def test_every_module_denied(self):
        perms = get_default_permissions()
        assert set(perms) == set(PERMISSION_MODULES)
        assert set(perms.values()) == {"Access Denied"}

    def test_returns_copy(self):
        perms = get_default_permissions()
        perms["accounts"] = "Full Access"
        assert DEFAULT_PERMISSIONS["accounts"] == "Access Denied"


class TestCustomPermissionUpsert:
    def test_existing_module_replaced_in_place(self):
        current = [{"module": "billing", "level": "Read Only"}, {"module": "reports2", "level": "Full Access"}]
        updated = upsert_custom_permission(current, "billing", "Data Entry")
        assert len(updated) == len(current)
        assert updated[0] == {"module": "billing", "level": "Data Entry"}
        # input untouched
        assert current[0]["level"] == "Read Only"

    def test_new_module_appended(self):
        current = [{"module": "billing", "level": "Read Only"}]
        updated = upsert_custom_permission(current, "archive", "Full Access")
        assert len(updated) == 2
        assert updated[-1] == {"module": "archive", "level": "Full Access"}

    def test_none_list_treated_as_empty(self):
        assert upsert_custom_permission(None, "archive", "Read Only") == [{"module": "archive", "level": "Read Only"}]

    def test_invalid_level_rejected(self):
        with pytest.raises(ValueError, match="Invalid permission level"):
            upsert_custom_permission([], "archive", "Superuser")


class TestCustomPermissionRemoval:
    def test_absent_module_signals_not_found(self):
        current = [{"module": "billing", "level": "Read Only"}]
        assert remove_custom_permission(current, "archive") is None
        assert len(current) == 1

    def test_empty_list_signals_not_found(self):
        assert remove_custom_permission([], "archive") is None

    def test_present_module_removed_once(self):
        current = [{"module": "billing", "level": "Read Only"}, {"module": "archive", "level": "Full Access"}]
        remaining = remove_custom_permission(current, "billing")
        assert remaining == [{"module": "archive", "level": "Full Access"}]


def test_effective_level_custom_wins_over_default():
    perms = get_default_permissions()
    custom = [{"module": "accounts", "level": PermissionLevel.FULL_ACCESS.value}]
    assert effective_level(perms, custom, "accounts") == "Full Access"
    assert effective_level(perms, custom, "reports") == "Access Denied"
    assert effective_level(None, None, "unknown") == "Access Denied"


def test_validators():
    assert validate_level("Read Only") == "Read Only"
    validate_role("super_admin")
    with pytest.raises(ValueError):
        validate_role("owner")
