"""Shared fixtures for portal client tests."""

import json
import time
from typing import Any, Dict, List, Optional

import httpx
import jwt
import pytest
from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request, Response

from placement_portal.api.client import PortalClient
from placement_portal.config import ClientConfig
from placement_portal.core.execution.user_notifier import CollectingSink, UserNotifier
from placement_portal.core.retry_config import RetryConfig
from placement_portal.infrastructure.auth.session import CredentialStore
from placement_portal.infrastructure.navigation import Navigator

BASE_URL = "http://portal.test/api"


def make_token(exp_offset: Optional[float] = 3600, **claims: Any) -> str:
    """Build an HS256 JWT expiring ``exp_offset`` seconds from now (None = no exp)."""
    payload: Dict[str, Any] = {"sub": "1", **claims}
    if exp_offset is not None:
        payload["exp"] = int(time.time() + exp_offset)
    return jwt.encode(payload, "test-secret", algorithm="HS256")


class RecordingSleep:
    """Backoff sleeper that records delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore()


@pytest.fixture
def navigator() -> Navigator:
    return Navigator("/dashboard")


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, redirect_delay=0.01, retry=RetryConfig())


@pytest.fixture
def make_client(sink, sleeper, credentials, navigator, client_config):
    """Factory building a PortalClient whose transport is the given handler."""

    def factory(handler=None, transport=None, sleep=None) -> PortalClient:
        if transport is None:
            transport = httpx.MockTransport(handler)
        return PortalClient(
            config=client_config,
            credentials=credentials,
            navigator=navigator,
            notifier=UserNotifier(sink),
            transport=transport,
            sleep=sleep or sleeper,
        )

    return factory


class Backend:
    """In-memory state behind the fake portal backend."""

    def __init__(self):
        self.spocs: Dict[int, Dict[str, Any]] = {
            1: {
                "id": 1,
                "name": "Priya Raman",
                "designation": "Placement Officer",
                "mobile_number": "9876543210",
                "email": "priya@kec.edu",
                "is_active": True,
            }
        }
        self.drives: Dict[int, Dict[str, Any]] = {
            7: {
                "id": 7,
                "company_name": "Acme Corp",
                "job_role": "Backend Engineer",
                "location": "Chennai",
                "spoc_id": 1,
                "ctc_min": 6,
                "ctc_max": 9,
                "min_cgpa": 7.5,
                "eligible_batches": [2026],
                "eligible_departments": ["CSE", "IT"],
                "status": "open",
                "applicant_count": 12,
            }
        }
        self.students: List[Dict[str, Any]] = [
            {
                "id": 100 + i,
                "email": f"student{i}@kec.edu",
                "full_name": f"Student {i}",
                "register_number": f"21CS{i:03d}",
                "department": "CSE" if i % 2 else "ECE",
                "batch_year": 2026,
                "mobile": "9000000000",
                "is_blocked": False,
            }
            for i in range(5)
        ]
        self.uploads: List[Dict[str, Any]] = []
        self.blocked: Dict[int, bool] = {}


def build_backend(state: Backend) -> FastAPI:
    """FastAPI app mimicking the portal backend routes under /api."""
    app = FastAPI()
    router = APIRouter(prefix="/api")

    def require_admin(authorization: Optional[str] = Header(None)) -> str:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing token")
        token = authorization[len("Bearer "):]
        try:
            payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        except jwt.InvalidTokenError:
            raise HTTPException(status_code=401, detail="Invalid token")
        if payload.get("role") != "admin":
            raise HTTPException(status_code=403, detail="Admins only")
        return payload["sub"]

    @router.get("/health")
    async def health():
        return {"status": "ok"}

    @router.post("/v1/admin/auth/login")
    async def admin_login(body: Dict[str, Any]):
        accounts = {
            "admin@kec.edu": ("secret", "admin"),
            "student@kec.edu": ("secret", "student"),
        }
        account = accounts.get(body.get("email"))
        if account is None or account[0] != body.get("password"):
            return Response(
                content='{"error": "Invalid credentials"}',
                status_code=401,
                media_type="application/json",
            )
        role = account[1]
        return {"token": make_token(role=role), "email": body["email"], "role": role}

    @router.post("/v1/admin/auth/forgot-password")
    async def forgot_password(body: Dict[str, Any]):
        return {"message": f"Reset link sent to {body['email']}"}

    @router.get("/v1/spocs")
    async def list_spocs():
        return list(state.spocs.values())

    @router.post("/v1/admin/spocs", dependencies=[Depends(require_admin)])
    async def create_spoc(body: Dict[str, Any]):
        if not body.get("email", "").endswith("@kec.edu"):
            return Response(
                content='{"error": "email must be an institutional address"}',
                status_code=422,
                media_type="application/json",
            )
        spoc_id = max(state.spocs) + 1
        state.spocs[spoc_id] = {"id": spoc_id, "is_active": True, **body}
        return state.spocs[spoc_id]

    @router.put("/v1/admin/spocs/{spoc_id}/status", dependencies=[Depends(require_admin)])
    async def toggle_spoc(spoc_id: int, body: Dict[str, Any]):
        if spoc_id not in state.spocs:
            raise HTTPException(status_code=404, detail="SPOC not found")
        state.spocs[spoc_id]["is_active"] = body["is_active"]
        return state.spocs[spoc_id]

    @router.delete("/v1/admin/spocs/{spoc_id}", dependencies=[Depends(require_admin)])
    async def delete_spoc(spoc_id: int):
        state.spocs.pop(spoc_id, None)
        return Response(status_code=204)

    @router.get("/v1/drives")
    async def list_drives(department: Optional[str] = None, batch: Optional[int] = None):
        drives = list(state.drives.values())
        if department:
            drives = [d for d in drives if department in d["eligible_departments"]]
        if batch:
            drives = [d for d in drives if batch in d["eligible_batches"]]
        return drives

    @router.get("/v1/admin/drives", dependencies=[Depends(require_admin)])
    async def list_admin_drives():
        return list(state.drives.values())

    @router.post("/v1/admin/drives", dependencies=[Depends(require_admin)])
    async def create_drive(request: Request):
        if request.headers.get("content-type", "").startswith("multipart/form-data"):
            form = await request.form()
            body = json.loads(form["drive_data"])
            for upload in form.getlist("attachments"):
                state.uploads.append({"filename": upload.filename, "size": len(await upload.read())})
        else:
            body = await request.json()
        drive_id = max(state.drives) + 1
        state.drives[drive_id] = {"id": drive_id, "status": "open", **body}
        return {"id": drive_id, "message": "Drive created"}

    @router.post("/v1/admin/drives/bulk-delete", dependencies=[Depends(require_admin)])
    async def bulk_delete_drives(body: Dict[str, Any]):
        deleted = [i for i in body["ids"] if state.drives.pop(i, None) is not None]
        return {"deleted": deleted}

    @router.get("/v1/admin/students", dependencies=[Depends(require_admin)])
    async def list_students(
        dept: Optional[str] = None, page: int = 1, limit: int = 10, search: Optional[str] = None
    ):
        rows = [s for s in state.students if not dept or s["department"] == dept]
        if search:
            rows = [s for s in rows if search.lower() in s["full_name"].lower()]
        start = (page - 1) * limit
        return {
            "data": rows[start:start + limit],
            "meta": {
                "total": len(rows),
                "page": page,
                "limit": limit,
                "total_pages": max(1, -(-len(rows) // limit)),
            },
        }

    @router.post("/v1/admin/students/bulk-upload", dependencies=[Depends(require_admin)])
    async def bulk_upload(request: Request):
        form = await request.form()
        upload = form["file"]
        content = await upload.read()
        state.uploads.append({"filename": upload.filename, "size": len(content)})
        return {"created": content.decode().count("\n") - 1}

    @router.put("/v1/admin/users/{student_id}/block", dependencies=[Depends(require_admin)])
    async def block_student(student_id: int, body: Dict[str, Any]):
        state.blocked[student_id] = body["block"]
        return {"id": student_id, "is_blocked": body["block"]}

    app.include_router(router)
    return app


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def backend_client(make_client, backend):
    """PortalClient talking to the fake backend in-process."""
    return make_client(transport=httpx.ASGITransport(app=build_backend(backend)))


@pytest.fixture
def admin_token() -> str:
    return make_token(role="admin")
