from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ONBOARDING_PREFIX
from ..core.enums import GateOutcome, SessionPhase


@dataclass(frozen=True)
class GatePolicy:
    """What a gate does for each settled session phase.

    ``only_under_prefix`` limits redirects to locations below that path;
    anywhere else the gate renders.
    """

    name: str
    on_unauthenticated: GateOutcome
    on_incomplete: GateOutcome
    on_complete: GateOutcome
    only_under_prefix: Optional[str] = None

    def outcome_for(self, phase: SessionPhase) -> GateOutcome:
        if phase == SessionPhase.UNAUTHENTICATED:
            return self.on_unauthenticated
        if phase == SessionPhase.AUTHENTICATED_INCOMPLETE:
            return self.on_incomplete
        if phase == SessionPhase.AUTHENTICATED_COMPLETE:
            return self.on_complete
        raise ValueError(f"No outcome for phase {phase!r}")

    def applies_to(self, location: str) -> bool:
        if self.only_under_prefix is None:
            return True
        return location.startswith(self.only_under_prefix)


# Public landing: onboarded users go straight to the dashboard; incomplete
# users may still see it so "save and exit" from onboarding works.
LANDING_POLICY = GatePolicy(
    name="landing",
    on_unauthenticated=GateOutcome.RENDER,
    on_incomplete=GateOutcome.RENDER,
    on_complete=GateOutcome.REDIRECT_DASHBOARD,
)

# Protected dashboard. Incomplete users always restart at the first
# onboarding step.
DASHBOARD_POLICY = GatePolicy(
    name="dashboard",
    on_unauthenticated=GateOutcome.REDIRECT_LOGIN,
    on_incomplete=GateOutcome.REDIRECT_ONBOARDING,
    on_complete=GateOutcome.RENDER,
)

ONBOARDING_POLICY = GatePolicy(
    name="onboarding",
    on_unauthenticated=GateOutcome.RENDER,
    on_incomplete=GateOutcome.RENDER,
    on_complete=GateOutcome.REDIRECT_DASHBOARD,
    only_under_prefix=ONBOARDING_PREFIX,
)
