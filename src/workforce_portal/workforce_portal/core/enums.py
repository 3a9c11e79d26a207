from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles inside a company."""

    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    DEPARTMENT_HEAD = "department_head"
    EMPLOYEE = "employee"


class SessionPhase(str, Enum):
    """Where a session sits in the access-gating state machine."""

    LOADING = "LOADING"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATED_INCOMPLETE = "AUTHENTICATED_INCOMPLETE"
    AUTHENTICATED_COMPLETE = "AUTHENTICATED_COMPLETE"


class GateOutcome(str, Enum):
    """What a gate does for a given session phase."""

    RENDER = "RENDER"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    REDIRECT_ONBOARDING = "REDIRECT_ONBOARDING"
    REDIRECT_DASHBOARD = "REDIRECT_DASHBOARD"


class ClockAction(str, Enum):
    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"


class ClockMethod(str, Enum):
    """How an attendance action was captured."""

    MANUAL = "MANUAL"
    BIOMETRIC = "BIOMETRIC"
    OFFLINE_SYNC = "OFFLINE_SYNC"
