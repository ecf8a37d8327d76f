"""Integration tests for feature services against a fake backend."""

import asyncio

import pytest

from placement_portal.core.errors import RequestFailed
from placement_portal.core.retry_config import ErrorKind
from placement_portal.models import CreateDriveInput, Round
from placement_portal.services import AuthService, DriveService, SpocService, StudentService
from placement_portal.services.auth_service import ADMIN_REQUIRED_MESSAGE, SESSION_EXPIRED_MESSAGE

from conftest import make_token


class TestAuthService:
    """Test login, logout and session restore."""

    @pytest.mark.asyncio
    async def test_admin_login_persists_session(self, backend_client, navigator):
        auth = AuthService(backend_client)

        user = await auth.login({"email": "admin@kec.edu", "password": "secret"})

        assert user.email == "admin@kec.edu"
        assert user.name == "admin"
        assert auth.is_authenticated is True
        assert auth.user == user
        assert navigator.current_location == "/dashboard"

    @pytest.mark.asyncio
    async def test_wrong_password_returns_none(self, backend_client, sink):
        """Test a rejected login is reported once and not raised."""
        auth = AuthService(backend_client)

        user = await auth.login({"email": "admin@kec.edu", "password": "nope"})

        assert user is None
        assert auth.is_authenticated is False
        assert sink.messages == ["Invalid credentials or session expired"]

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, backend_client, sink):
        auth = AuthService(backend_client)

        user = await auth.login({"email": "student@kec.edu", "password": "secret"})

        assert user is None
        assert auth.is_authenticated is False
        assert sink.messages == [ADMIN_REQUIRED_MESSAGE]

    @pytest.mark.asyncio
    async def test_logout_clears_and_redirects(self, backend_client, navigator):
        auth = AuthService(backend_client)
        await auth.login({"email": "admin@kec.edu", "password": "secret"})

        auth.logout()

        assert auth.is_authenticated is False
        assert navigator.current_location == "/login"

    def test_restore_expired_session(self, backend_client, credentials, navigator, sink):
        credentials.save(make_token(exp_offset=-60, role="admin"), {"email": "a@kec.edu"})
        auth = AuthService(backend_client)

        assert auth.restore_session() is None
        assert credentials.stored() is None
        assert sink.messages == [SESSION_EXPIRED_MESSAGE]
        assert navigator.current_location == "/login"

    def test_restore_valid_session(self, backend_client, credentials):
        credentials.save(
            make_token(role="admin"), {"email": "admin@kec.edu", "role": "admin", "name": "admin"}
        )

        user = AuthService(backend_client).restore_session()

        assert user.role == "admin"

    @pytest.mark.asyncio
    async def test_forgot_password(self, backend_client):
        result = await AuthService(backend_client).forgot_password("admin@kec.edu")

        assert result == {"message": "Reset link sent to admin@kec.edu"}


class TestSpocService:
    """Test SPOC CRUD."""

    @pytest.mark.asyncio
    async def test_list_is_public(self, backend_client):
        spocs = await SpocService(backend_client).list_spocs()

        assert [s.name for s in spocs] == ["Priya Raman"]

    @pytest.mark.asyncio
    async def test_create_and_toggle(self, backend_client, credentials, admin_token):
        credentials.save(admin_token)
        service = SpocService(backend_client)

        spoc = await service.create_spoc(
            {
                "name": "Arun K",
                "designation": "Coordinator",
                "mobile_number": "9000011111",
                "email": "arun@kec.edu",
            }
        )
        toggled = await service.toggle_spoc_status(spoc.id, False)

        assert spoc.id == 2
        assert toggled.is_active is False

    @pytest.mark.asyncio
    async def test_validation_error_surfaces_detail(self, backend_client, credentials, admin_token, sink):
        credentials.save(admin_token)

        with pytest.raises(RequestFailed) as exc_info:
            await SpocService(backend_client).create_spoc(
                {
                    "name": "Outsider",
                    "designation": "HR",
                    "mobile_number": "1",
                    "email": "hr@gmail.com",
                }
            )

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert sink.messages == ["Validation error: email must be an institutional address"]

    @pytest.mark.asyncio
    async def test_delete_handles_empty_body(self, backend_client, credentials, admin_token, backend):
        credentials.save(admin_token)

        await SpocService(backend_client).delete_spoc(1)

        assert backend.spocs == {}

    @pytest.mark.asyncio
    async def test_missing_spoc_is_not_found(self, backend_client, credentials, admin_token):
        credentials.save(admin_token)

        with pytest.raises(RequestFailed) as exc_info:
            await SpocService(backend_client).toggle_spoc_status(99, True)

        assert exc_info.value.kind == ErrorKind.NOT_FOUND


class TestDriveService:
    """Test drive operations."""

    @pytest.mark.asyncio
    async def test_list_drives_with_filters(self, backend_client):
        service = DriveService(backend_client)

        matching = await service.list_drives(department="CSE", batch=2026)
        other = await service.list_drives(department="MECH")

        assert [d.company_name for d in matching] == ["Acme Corp"]
        assert other == []

    @pytest.mark.asyncio
    async def test_get_drive_searches_admin_list(self, backend_client, credentials, admin_token):
        credentials.save(admin_token)
        service = DriveService(backend_client)

        assert (await service.get_drive(7)).job_role == "Backend Engineer"
        assert await service.get_drive(8) is None

    @pytest.mark.asyncio
    async def test_create_drive_json(self, backend_client, credentials, admin_token, backend):
        credentials.save(admin_token)
        drive = CreateDriveInput(
            company_name="Globex",
            job_role="Data Analyst",
            min_cgpa=7.0,
            eligible_departments=["CSE"],
            rounds=[Round(name="Aptitude", date="2026-08-01")],
        )

        result = await DriveService(backend_client).create_drive(drive)

        assert result["id"] == 8
        assert backend.drives[8]["rounds"][0]["name"] == "Aptitude"

    @pytest.mark.asyncio
    async def test_create_drive_with_attachments(self, backend_client, credentials, admin_token, backend):
        credentials.save(admin_token)

        await DriveService(backend_client).create_drive(
            {"company_name": "Initech", "job_role": "SRE"},
            attachments=[("jd.pdf", b"%PDF-1.4 job description", "application/pdf")],
        )

        assert backend.drives[8]["company_name"] == "Initech"
        assert backend.uploads == [{"filename": "jd.pdf", "size": 24}]

    @pytest.mark.asyncio
    async def test_create_drive_reports_upload_progress(self, backend_client, credentials, admin_token):
        credentials.save(admin_token)
        progress = []

        await DriveService(backend_client).create_drive(
            {"company_name": "Initech", "job_role": "SRE"},
            attachments=[("jd.pdf", b"%" * 4096, "application/pdf")],
            on_progress=progress.append,
        )

        assert progress[-1] == 100
        assert progress == sorted(progress)

    @pytest.mark.asyncio
    async def test_bulk_delete(self, backend_client, credentials, admin_token, backend):
        credentials.save(admin_token)

        result = await DriveService(backend_client).bulk_delete_drives([7, 42])

        assert result == {"deleted": [7]}
        assert backend.drives == {}

    @pytest.mark.asyncio
    async def test_unknown_document_type_rejected(self, backend_client):
        with pytest.raises(ValueError):
            await DriveService(backend_client).get_student_document_url(100, "passport")

    @pytest.mark.asyncio
    async def test_admin_route_without_login_invalidates(self, backend_client, navigator, sink):
        """Test an unauthenticated admin call fails as auth and schedules a login redirect."""
        with pytest.raises(RequestFailed) as exc_info:
            await DriveService(backend_client).list_admin_drives()

        assert exc_info.value.kind == ErrorKind.AUTH
        assert sink.messages == ["Invalid credentials or session expired"]
        await asyncio.sleep(0.05)
        assert navigator.current_location == "/login"


class TestStudentService:
    """Test student operations."""

    @pytest.mark.asyncio
    async def test_paginated_listing(self, backend_client, credentials, admin_token):
        credentials.save(admin_token)

        page = await StudentService(backend_client).list_students({"dept": "CSE", "limit": 1})

        assert page.meta.total == 2
        assert page.meta.total_pages == 2
        assert len(page.data) == 1
        assert page.data[0].department == "CSE"

    @pytest.mark.asyncio
    async def test_bulk_upload_from_path(self, backend_client, credentials, admin_token, backend, tmp_path):
        credentials.save(admin_token)
        csv_path = tmp_path / "batch2026.csv"
        csv_path.write_text("email,full_name\na@kec.edu,A\nb@kec.edu,B\n")

        result = await StudentService(backend_client).bulk_upload_students(csv_path)

        assert result == {"created": 2}
        assert backend.uploads[0]["filename"] == "batch2026.csv"

    @pytest.mark.asyncio
    async def test_block_student(self, backend_client, credentials, admin_token, backend):
        credentials.save(admin_token)

        await StudentService(backend_client).set_blocked(101, True)

        assert backend.blocked == {101: True}
