from __future__ import annotations

import pytest

from workforce_portal.company.model import Company
from workforce_portal.container import wire
from workforce_portal.core.enums import Role
from workforce_portal.main import create_app
from workforce_portal.stores.storage import JsonFileStorage
from workforce_portal.uploads.client import UploadClient

from fakes import (
    COMPANY_ID,
    EMPLOYEE_ID,
    NEW_OWNER_ID,
    OWNER_ID,
    InMemoryAttendance,
    InMemoryCompanies,
    InMemoryUsers,
    make_user,
)


@pytest.fixture
def storage(tmp_path):
    return JsonFileStorage(tmp_path / "device")


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            make_user(OWNER_ID, "owner@acme.test", Role.OWNER),
            make_user(EMPLOYEE_ID, "employee@acme.test", Role.EMPLOYEE),
            make_user(NEW_OWNER_ID, "new@acme.test", Role.OWNER, company_id=None, onboarding_completed=False),
        ]
    )


@pytest.fixture
def companies_repo():
    return InMemoryCompanies([Company(company_id=COMPANY_ID, name="Acme")])


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, companies_repo, attendance_repo):
    return wire(
        users_repo=users_repo,
        companies_repo=companies_repo,
        attendance_repo=attendance_repo,
        secret_key="test-secret",
        upload_client=UploadClient("http://upload.test"),
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="workforce_portal.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: int) -> None:
        with client.session_transaction() as s:
            s["user_id"] = user_id

    return _login
