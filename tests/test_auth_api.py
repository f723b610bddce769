"""인증 API 테스트 — 회원가입, 로그인, 프로필, 관리자 사용자 관리.

Auth API tests — Registration, login, profile, password change, and admin
user management.
"""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.models.enums import ComplaintStatus
from complaint_portal.repositories.complaint_repository import complaint_repository
from complaint_portal.services.complaint_service import complaint_service
from tests.conftest import TEST_PASSWORD, actor_of, auth_header

AUTH = "/api/auth"


class TestRegister:

    async def test_register_user(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={
            "name": "Nina New",
            "email": "Nina@Portal.io",
            "password": "hunter22",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["email"] == "nina@portal.io"
        assert data["user"]["role"] == "User"

    async def test_duplicate_email(self, client: AsyncClient, submitter):
        res = await client.post(f"{AUTH}/register", json={
            "name": "Uma Again",
            "email": "uma@portal.io",
            "password": "hunter22",
        })
        assert res.status_code == 409
        assert res.json()["message"] == "User with this email already exists"

    async def test_admin_registration_disabled(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={
            "name": "Mallory",
            "email": "mallory@portal.io",
            "password": "hunter22",
            "role": "Admin",
            "admin_key": "guess",
        })
        assert res.status_code == 403

    async def test_short_password(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={
            "name": "Nina New",
            "email": "nina@portal.io",
            "password": "123",
        })
        assert res.status_code == 422
        assert res.json()["errors"][0]["field"] == "password"


class TestLogin:

    async def test_login_success(self, client: AsyncClient, staff_user):
        res = await client.post(f"{AUTH}/login", json={"email": "staff@portal.io", "password": TEST_PASSWORD})
        assert res.status_code == 200
        data = res.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["department"] == "Maintenance"

        res = await client.get(f"{AUTH}/profile", headers={"Authorization": f"Bearer {data['token']}"})
        assert res.status_code == 200
        assert res.json()["user"]["id"] == staff_user.id

    async def test_login_wrong_password(self, client: AsyncClient, staff_user):
        res = await client.post(f"{AUTH}/login", json={"email": "staff@portal.io", "password": "wrong-one"})
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid email or password"

    async def test_login_unknown_email(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/login", json={"email": "ghost@portal.io", "password": "whatever"})
        assert res.status_code == 401


class TestProfile:

    async def test_update_profile(self, client: AsyncClient, submitter):
        res = await client.patch(
            f"{AUTH}/profile", json={"contact_info": "ext. 4410"}, headers=auth_header(submitter)
        )
        assert res.status_code == 200
        assert res.json()["user"]["contact_info"] == "ext. 4410"
        assert res.json()["user"]["name"] == "Uma User"

    async def test_change_password(self, client: AsyncClient, submitter):
        res = await client.post(
            f"{AUTH}/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-pass"},
            headers=auth_header(submitter),
        )
        assert res.status_code == 200

        res = await client.post(f"{AUTH}/login", json={"email": "uma@portal.io", "password": "brand-new-pass"})
        assert res.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, submitter):
        res = await client.post(
            f"{AUTH}/change-password",
            json={"current_password": "not-it", "new_password": "brand-new-pass"},
            headers=auth_header(submitter),
        )
        assert res.status_code == 422

    async def test_profile_requires_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/profile")
        assert res.status_code == 401


class TestUserManagement:

    async def test_list_staff(self, client: AsyncClient, admin_user, staff_user, other_staff, submitter):
        res = await client.get(f"{AUTH}/staff", headers=auth_header(admin_user))
        assert res.status_code == 200
        names = [user["name"] for user in res.json()["users"]]
        assert names == ["Olga Staff", "Sam Staff"]

    async def test_list_staff_forbidden_for_staff(self, client: AsyncClient, staff_user):
        res = await client.get(f"{AUTH}/staff", headers=auth_header(staff_user))
        assert res.status_code == 403

    async def test_list_all(self, client: AsyncClient, admin_user, staff_user, submitter):
        res = await client.get(f"{AUTH}/all", headers=auth_header(admin_user))
        assert res.status_code == 200
        assert len(res.json()["users"]) == 3

    async def test_promote_to_staff_requires_department(self, client: AsyncClient, admin_user, submitter):
        res = await client.patch(
            f"{AUTH}/users/{submitter.id}", json={"role": "Staff"}, headers=auth_header(admin_user)
        )
        assert res.status_code == 422

        res = await client.patch(
            f"{AUTH}/users/{submitter.id}",
            json={"role": "Staff", "department": "Cleaning"},
            headers=auth_header(admin_user),
        )
        assert res.status_code == 200
        assert res.json()["user"]["role"] == "Staff"
        assert res.json()["user"]["department"] == "Cleaning"

    async def test_admin_cannot_demote_self(self, client: AsyncClient, admin_user):
        res = await client.patch(
            f"{AUTH}/users/{admin_user.id}", json={"role": "User"}, headers=auth_header(admin_user)
        )
        assert res.status_code == 422

    async def test_delete_staff_reopens_assigned_work(
        self, client: AsyncClient, db: AsyncSession, admin_user, staff_user, submitter
    ):
        """담당자 삭제 시 배정된 민원은 Open으로 되돌아감."""
        complaint = await complaint_service.create(db, actor_of(submitter), {
            "title": "Clogged drain",
            "description": "The drain in the washroom is clogged again.",
            "category": "plumbing",
        })
        await complaint_service.assign(db, actor_of(admin_user), complaint.id, staff_user.id)
        complaint_id = complaint.id
        await db.commit()

        res = await client.delete(f"{AUTH}/users/{staff_user.id}", headers=auth_header(admin_user))
        assert res.status_code == 200

        stored = await complaint_repository.get_by_id(db, complaint_id, fresh=True)
        assert stored.status is ComplaintStatus.OPEN
        assert stored.assignee_id is None

    async def test_delete_staff_keeps_resolved_work(
        self, client: AsyncClient, db: AsyncSession, admin_user, staff_user, submitter
    ):
        """해결된 민원은 Resolved 유지, 담당자만 NULL."""
        complaint = await complaint_service.create(db, actor_of(submitter), {
            "title": "Flickering light",
            "description": "The corridor light keeps flickering at night.",
            "category": "electrical",
        })
        await complaint_service.assign(db, actor_of(admin_user), complaint.id, staff_user.id)
        await complaint_service.update_status(db, actor_of(staff_user), complaint.id, "In-progress")
        await complaint_service.update_status(db, actor_of(staff_user), complaint.id, "Resolved", "Replaced the tube")
        complaint_id = complaint.id
        await db.commit()

        res = await client.delete(f"{AUTH}/users/{staff_user.id}", headers=auth_header(admin_user))
        assert res.status_code == 200

        stored = await complaint_repository.get_by_id(db, complaint_id, fresh=True)
        assert stored.status is ComplaintStatus.RESOLVED
        assert stored.assignee_id is None
        assert stored.resolution_notes == "Replaced the tube"

        res = await client.get(f"/api/complaints/{complaint_id}", headers=auth_header(submitter))
        assert res.status_code == 200
        assert res.json()["complaint"]["status"] == "Resolved"

    async def test_delete_user_removes_their_complaints(
        self, client: AsyncClient, db: AsyncSession, admin_user, submitter
    ):
        complaint = await complaint_service.create(db, actor_of(submitter), {
            "title": "Broken chair",
            "description": "Chair in room 101 has a broken leg.",
            "category": "facility",
        })
        complaint_id = complaint.id
        await db.commit()

        res = await client.delete(f"{AUTH}/users/{submitter.id}", headers=auth_header(admin_user))
        assert res.status_code == 200
        assert await complaint_repository.get_by_id(db, complaint_id, fresh=True) is None

    async def test_cannot_delete_self_or_admin(self, client: AsyncClient, admin_user):
        res = await client.delete(f"{AUTH}/users/{admin_user.id}", headers=auth_header(admin_user))
        assert res.status_code == 422
