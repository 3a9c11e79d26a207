from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .company.mysql_company_repository import MySQLCompanyRepository
from .company.repository import CompanyRepository
from .company.service import CompanySettingsService, OnboardingService
from .database.connection import DBConfig, DatabaseConnection
from .uploads.client import UploadClient
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, RegistrationService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    companies_repo: CompanyRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    registration_service: RegistrationService
    token_service: TokenService
    company_settings_service: CompanySettingsService
    onboarding_service: OnboardingService
    attendance_service: AttendanceService
    upload_client: UploadClient


def wire(
    *,
    users_repo: UserRepository,
    companies_repo: CompanyRepository,
    attendance_repo: AttendanceRepository,
    secret_key: str,
    upload_client: UploadClient,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the service graph on top of any repository implementations."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        companies_repo=companies_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo, companies_repo),
        registration_service=RegistrationService(users_repo),
        token_service=TokenService(secret_key),
        company_settings_service=CompanySettingsService(companies_repo),
        onboarding_service=OnboardingService(users_repo, companies_repo),
        attendance_service=AttendanceService(attendance_repo),
        upload_client=upload_client,
    )


def build_container(*, db_config: dict, secret_key: str, upload_endpoint: str, upload_client_name: str) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        companies_repo=MySQLCompanyRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        secret_key=secret_key,
        upload_client=UploadClient(upload_endpoint, client_name=upload_client_name),
        conn=conn,
    )
