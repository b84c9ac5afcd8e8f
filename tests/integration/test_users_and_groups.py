from vhr.utils.role_permissions import ROLE_SUPER_ADMIN, get_default_permissions


def _create_group(client, headers, title="Paralegals", **extra):
    resp = client.post("/api/user-groups", json={"title": title, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestUserGroups:
    def test_create_defaults_to_deny_all(self, client, admin_headers):
        resp = client.post("/api/user-groups", json={"title": "Paralegals"}, headers=admin_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User group created successfully"
        group = body["data"]
        assert group["permissions"] == get_default_permissions()
        assert group["customPermissions"] == []
        assert group["isActive"] is True
        assert group["userCount"] == 0

    def test_duplicate_title_conflicts(self, client, admin_headers):
        _create_group(client, admin_headers)
        resp = client.post("/api/user-groups", json={"title": "Paralegals"}, headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["detail"] == "User group with this title already exists"

    def test_rename_onto_existing_title_conflicts(self, client, admin_headers):
        _create_group(client, admin_headers, "Paralegals")
        other = _create_group(client, admin_headers, "Clerks")
        resp = client.put(f"/api/user-groups/{other['id']}", json={"title": "Paralegals"}, headers=admin_headers)
        assert resp.status_code == 409

    def test_invalid_permission_record_rejected(self, client, admin_headers):
        resp = client.post(
            "/api/user-groups",
            json={"title": "Broken", "permissions": {"accounts": "Full Access"}},
            headers=admin_headers,
        )
        assert resp.status_code == 400

    def test_list_reports_user_counts(self, client, admin_headers, group_factory, user_factory):
        group = group_factory("Clerks")
        user_factory("a@example.com", group=group)
        user_factory("b@example.com", group=group)
        user_factory("c@example.com", group=group, is_delete=True)
        group_factory("Empty")

        resp = client.get("/api/user-groups", headers=admin_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["totalItems"] == 2
        counts = {g["title"]: g["userCount"] for g in body["data"]}
        assert counts == {"Clerks": 2, "Empty": 0}

        single = client.get(f"/api/user-groups/{group.id}", headers=admin_headers).json()["data"]
        assert single["userCount"] == 2

        members = client.get(f"/api/user-groups/{group.id}/users", headers=admin_headers).json()
        assert {m["email"] for m in members["data"]} == {"a@example.com", "b@example.com"}

    def test_delete_blocked_until_users_reassigned(self, client, admin_headers, group_factory, user_factory):
        group = group_factory("Clerks")
        member = user_factory("a@example.com", group=group)

        resp = client.delete(f"/api/user-groups/{group.id}", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cannot delete group with assigned users. Please reassign users first."

        moved = client.put(f"/api/users/{member.id}", json={"userGroupId": None}, headers=admin_headers)
        assert moved.status_code == 200
        assert moved.json()["data"]["userGroupId"] is None

        resp = client.delete(f"/api/user-groups/{group.id}", headers=admin_headers)
        assert resp.status_code == 200
        assert client.get(f"/api/user-groups/{group.id}", headers=admin_headers).status_code == 404

    def test_custom_permission_upsert_and_remove(self, client, admin_headers):
        group = _create_group(client, admin_headers)
        url = f"/api/user-groups/{group['id']}/permissions"

        resp = client.post(url, json={"module": "billing", "level": "Read Only"}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Custom permission added successfully"
        resp = client.post(url, json={"module": "billing", "level": "Full Access"}, headers=admin_headers)
        assert resp.json()["data"]["customPermissions"] == [{"module": "billing", "level": "Full Access"}]

        resp = client.post(url, json={"module": "archive", "level": "Data Entry"}, headers=admin_headers)
        assert len(resp.json()["data"]["customPermissions"]) == 2

        resp = client.post(url, json={"module": "archive", "level": "Everything"}, headers=admin_headers)
        assert resp.status_code == 400

        resp = client.delete(f"{url}/billing", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["customPermissions"] == [{"module": "archive", "level": "Data Entry"}]

        resp = client.delete(f"{url}/billing", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Permission not found"


class TestUsers:
    def test_create_and_list(self, client, admin_headers, group_factory):
        group = group_factory("Clerks")
        resp = client.post(
            "/api/users",
            json={"name": "Bob", "email": "bob@example.com", "password": "secret123", "userGroupId": group.id},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["userGroupId"] == group.id

        dup = client.post(
            "/api/users",
            json={"name": "Bob", "email": "BOB@example.com", "password": "secret123"},
            headers=admin_headers,
        )
        assert dup.status_code == 409
        assert dup.json()["detail"] == "User with this email already exists"

        listing = client.get("/api/users", params={"search": "bob"}, headers=admin_headers).json()
        assert [u["email"] for u in listing["data"]] == ["bob@example.com"]

    def test_create_with_unknown_group(self, client, admin_headers):
        resp = client.post(
            "/api/users",
            json={"name": "Bob", "email": "bob@example.com", "password": "secret123", "userGroupId": 999},
            headers=admin_headers,
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User group not found"

    def test_partial_update_keeps_other_fields(self, client, admin_headers, user_factory, group_factory):
        group = group_factory("Clerks")
        user = user_factory("bob@example.com", group=group)
        resp = client.put(f"/api/users/{user.id}", json={"name": "Robert"}, headers=admin_headers)
        data = resp.json()["data"]
        assert data["name"] == "Robert"
        assert data["email"] == "bob@example.com"
        assert data["userGroupId"] == group.id

    def test_soft_delete(self, client, admin_headers, user_factory):
        user = user_factory("bob@example.com")
        assert client.delete(f"/api/users/{user.id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/users/{user.id}", headers=admin_headers).status_code == 404
        emails = [u["email"] for u in client.get("/api/users", headers=admin_headers).json()["data"]]
        assert "bob@example.com" not in emails


class TestEffectivePermissions:
    def test_super_admin_short_circuits_group(self, client, admin_headers, user_factory, group_factory):
        deny = group_factory("Deny")
        boss = user_factory("boss@example.com", role=ROLE_SUPER_ADMIN, group=deny)
        data = client.get(f"/api/users/{boss.id}/permissions", headers=admin_headers).json()["data"]
        assert data["hasFullAccess"] is True
        assert data["message"] == "Super admin has full access"
        assert data["permissions"] is None

    def test_user_without_group(self, client, admin_headers, user_factory):
        user = user_factory("solo@example.com")
        data = client.get(f"/api/users/{user.id}/permissions", headers=admin_headers).json()["data"]
        assert data["hasFullAccess"] is False
        assert data["message"] == "User is not assigned to any group"

    def test_group_permissions_returned(self, client, admin_headers, user_factory, group_factory):
        perms = get_default_permissions()
        perms["accounts"] = "Read Only"
        group = group_factory("Clerks", permissions=perms, custom_permissions=[{"module": "accounts", "level": "Full Access"}])
        user = user_factory("clerk@example.com", group=group)
        data = client.get(f"/api/users/{user.id}/permissions", headers=admin_headers).json()["data"]
        assert data["permissions"]["accounts"] == "Read Only"
        assert data["customPermissions"] == [{"module": "accounts", "level": "Full Access"}]
        assert data["userGroupId"] == group.id

    def test_inactive_group_still_grants_its_permissions(self, client, admin_headers, user_factory, group_factory):
        perms = get_default_permissions()
        perms["reports"] = "Read Only"
        paused = group_factory("Paused", permissions=perms, is_active=False)
        user = user_factory("a@example.com", group=paused)
        data = client.get(f"/api/users/{user.id}/permissions", headers=admin_headers).json()["data"]
        assert data["hasFullAccess"] is False
        assert data["message"] is None
        assert data["permissions"]["reports"] == "Read Only"

    def test_deleted_group(self, client, admin_headers, user_factory, group_factory):
        user = user_factory("b@example.com", group=group_factory("Removed", is_delete=True))
        data = client.get(f"/api/users/{user.id}/permissions", headers=admin_headers).json()["data"]
        assert data["message"] == "Assigned group not found or inactive"
        assert data["permissions"] is None

    def test_unknown_user(self, client, admin_headers):
        resp = client.get("/api/users/4242/permissions", headers=admin_headers)
        assert resp.status_code == 404
