"""Access gating: project a session onto a navigation decision.

A gate never owns state. Given the current session snapshot (or None when
no session provider is mounted), a policy and the requested location it
returns one of: show the loading placeholder, render the wrapped content,
or redirect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

from ..core.constants import DASHBOARD_ROUTE, LOGIN_ROUTE, ONBOARDING_START_ROUTE
from ..core.enums import GateOutcome, SessionPhase
from ..session.model import ANONYMOUS, Session
from .policy import GatePolicy

log = logging.getLogger(__name__)

DecisionKind = Literal["loading", "render", "redirect"]

_REDIRECT_TARGETS = {
    GateOutcome.REDIRECT_LOGIN: LOGIN_ROUTE,
    GateOutcome.REDIRECT_ONBOARDING: ONBOARDING_START_ROUTE,
    GateOutcome.REDIRECT_DASHBOARD: DASHBOARD_ROUTE,
}


@dataclass(frozen=True)
class GateDecision:
    kind: DecisionKind
    outcome: GateOutcome = GateOutcome.RENDER
    target: Optional[str] = None
    replace: bool = False
    state: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_redirect(self) -> bool:
        return self.kind == "redirect"

    @property
    def return_to(self) -> Optional[str]:
        return self.state.get("from")


SHOW_LOADING = GateDecision(kind="loading")
SHOW_CONTENT = GateDecision(kind="render")


def classify(session: Optional[Session]) -> SessionPhase:
    if session is None:
        return SessionPhase.UNAUTHENTICATED
    if session.loading:
        return SessionPhase.LOADING
    if session.user is None:
        return SessionPhase.UNAUTHENTICATED
    if session.user.onboarding_completed:
        return SessionPhase.AUTHENTICATED_COMPLETE
    return SessionPhase.AUTHENTICATED_INCOMPLETE


def evaluate(session: Optional[Session], policy: GatePolicy, location: str = "") -> GateDecision:
    if session is None:
        log.warning("session provider not available in %s gate, treating as not authenticated", policy.name)
        session = ANONYMOUS

    phase = classify(session)
    if phase == SessionPhase.LOADING:
        return SHOW_LOADING

    outcome = policy.outcome_for(phase)
    if outcome == GateOutcome.RENDER or not policy.applies_to(location):
        return SHOW_CONTENT

    state: dict[str, str] = {}
    if outcome == GateOutcome.REDIRECT_LOGIN:
        state["from"] = location

    return GateDecision(
        kind="redirect",
        outcome=outcome,
        target=_REDIRECT_TARGETS[outcome],
        replace=True,
        state=state,
    )
