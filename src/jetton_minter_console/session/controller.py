"""Operator session state machine.

The session walks a fixed set of states:

    SELECT_TARGET -> (OVERRIDE_PROMPT) -> BIND_SESSION -> DETERMINE_ROLE
        -> ACTION_LOOP -> EXIT

Each state handler returns the next state; ``TRANSITIONS`` lists the moves
each state may make. Reprompts loop back to an earlier state, and choosing
Quit in the action menu is the only way to reach EXIT. Fatal console errors
propagate out of ``run``.
"""

import time
from enum import Enum
from typing import Callable, Optional

from jetton_minter_console.config import ConsoleSettings
from jetton_minter_console.execution.orchestrator import ActionOrchestrator
from jetton_minter_console.models.enums import MenuAction, Role
from jetton_minter_console.models.ledger import ContractRef
from jetton_minter_console.models.report import ActionReport
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.ui import ConsoleUI
from jetton_minter_console.session.context import BoundSession, SessionContext
from jetton_minter_console.session.roles import actions_for_role, determine_role

logger = get_logger(__name__)


class SessionState(str, Enum):
    SELECT_TARGET = "select_target"
    OVERRIDE_PROMPT = "override_prompt"
    BIND_SESSION = "bind_session"
    DETERMINE_ROLE = "determine_role"
    ACTION_LOOP = "action_loop"
    EXIT = "exit"


TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.SELECT_TARGET: {
        SessionState.SELECT_TARGET,
        SessionState.OVERRIDE_PROMPT,
        SessionState.BIND_SESSION,
    },
    SessionState.OVERRIDE_PROMPT: {
        SessionState.SELECT_TARGET,
        SessionState.BIND_SESSION,
    },
    SessionState.BIND_SESSION: {SessionState.DETERMINE_ROLE},
    SessionState.DETERMINE_ROLE: {SessionState.ACTION_LOOP},
    SessionState.ACTION_LOOP: {SessionState.ACTION_LOOP, SessionState.EXIT},
    SessionState.EXIT: set(),
}


class SessionController:
    """Drives one operator session from target selection to exit."""

    def __init__(
        self,
        context: SessionContext,
        ui: ConsoleUI,
        settings: Optional[ConsoleSettings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initializes the controller.

        Args:
            context: Pre-configured collaborators for the session.
            ui: Prompt layer used for every operator interaction.
            settings: Console settings; defaults are used when omitted.
            sleep: Sleep function used while polling, injectable for tests.
        """
        self.context = context
        self.ui = ui
        self.settings = settings or ConsoleSettings()
        self._sleep = sleep

        self.state = SessionState.SELECT_TARGET
        self.ref: Optional[ContractRef] = None
        self.session: Optional[BoundSession] = None
        self.role: Optional[Role] = None
        self.reports: list[ActionReport] = []
        self._orchestrator: Optional[ActionOrchestrator] = None

        self._handlers: dict[SessionState, Callable[[], SessionState]] = {
            SessionState.SELECT_TARGET: self._select_target,
            SessionState.OVERRIDE_PROMPT: self._override_prompt,
            SessionState.BIND_SESSION: self._bind_session,
            SessionState.DETERMINE_ROLE: self._determine_role,
            SessionState.ACTION_LOOP: self._action_loop,
        }

    def run(self) -> list[ActionReport]:
        """Runs the session until the operator quits.

        Returns:
            Reports of every mutating action performed in the session.
        """
        while self.state != SessionState.EXIT:
            self.step()
        return self.reports

    def step(self) -> SessionState:
        """Executes the current state's handler and moves to the next state."""
        next_state = self._handlers[self.state]()
        if next_state not in TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal session transition {self.state.value} -> {next_state.value}"
            )
        logger.debug(
            f"Session transition {self.state.value} -> {next_state.value}",
            extra={"extra_fields": {"event": "session_transition"}},
        )
        self.state = next_state
        return next_state

    def _select_target(self) -> SessionState:
        address = self.ui.prompt_address("Please enter minter address:")
        contract_state = self.context.ledger.get_contract_state(address)
        if not contract_state.is_active:
            self.ui.write(
                "This contract is not active!\nPlease use another address, or deploy it first\n"
            )
            return SessionState.SELECT_TARGET

        self.ref = self.context.contract_ref(address)
        matches = self.ref.code_matches(contract_state)
        if matches is None:
            logger.warning(
                f"No expected code configured, skipping code check for {address}",
                extra={"extra_fields": {"event": "code_check_skipped"}},
            )
            return SessionState.BIND_SESSION
        if not matches:
            self.ui.write("Contract code differs from the current contract version!\n")
            return SessionState.OVERRIDE_PROMPT
        return SessionState.BIND_SESSION

    def _override_prompt(self) -> SessionState:
        if self.ui.choose("Use address anyway", ["Yes", "No"]) == "Yes":
            logger.warning(
                f"Operator accepted code mismatch for {self.ref.address}",
                extra={"extra_fields": {"event": "code_mismatch_accepted"}},
            )
            return SessionState.BIND_SESSION
        self.ref = None
        return SessionState.SELECT_TARGET

    def _bind_session(self) -> SessionState:
        self.session = self.context.bind(self.ref)
        self._orchestrator = ActionOrchestrator(
            self.session, self.ui, self.settings, sleep=self._sleep
        )
        return SessionState.DETERMINE_ROLE

    def _determine_role(self) -> SessionState:
        admin = None
        if self.session.sender.is_authenticated:
            admin = self.session.binding.get_admin_address()
        self.role = determine_role(self.session.sender, admin)

        if self.role == Role.ADMIN:
            self.ui.write("Current wallet is minter admin!\n")
        else:
            self.ui.write(
                "Current wallet is not admin!\nAvailable actions restricted\n"
            )
        logger.info(
            f"Session bound to {self.session.address} as {self.role.value}",
            extra={"extra_fields": {"event": "session_bound", "role": self.role.value}},
        )
        return SessionState.ACTION_LOOP

    def _action_loop(self) -> SessionState:
        options = [a.value for a in actions_for_role(self.role)]
        action = MenuAction(self.ui.choose("Pick action:", options))

        if action == MenuAction.QUIT:
            return SessionState.EXIT
        if action == MenuAction.INFO:
            self._orchestrator.info()
        elif action == MenuAction.MINT:
            self.reports.append(self._orchestrator.mint())
        elif action == MenuAction.CHANGE_ADMIN:
            self.reports.append(self._orchestrator.change_admin())
        elif action == MenuAction.CHANGE_CONTENT:
            self.reports.append(self._orchestrator.change_content())
        return SessionState.ACTION_LOOP


def run_console(
    context: SessionContext,
    ui: ConsoleUI,
    settings: Optional[ConsoleSettings] = None,
) -> list[ActionReport]:
    """Runs an interactive operator session for a configured context."""
    return SessionController(context, ui, settings).run()
