import pytest

from conftest import ADMIN, MINTER, OTHER, ScriptedLedger
from jetton_minter_console.config import ConsoleSettings
from jetton_minter_console.errors import NoHistoryError
from jetton_minter_console.ledger.sandbox import SandboxMinter
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.enums import ActionOutcome, ContractStatus, Role
from jetton_minter_console.models.ledger import Sender
from jetton_minter_console.session.controller import (
    TRANSITIONS,
    SessionController,
    SessionState,
)
from jetton_minter_console.session.roles import actions_for_role, determine_role
from jetton_minter_console.ui.scripted import ScriptedUI

SETTINGS = ConsoleSettings(poll_interval=0)
ADMIN_MENU = ["Mint", "Change admin", "Change content", "Info", "Quit"]
VIEWER_MENU = ["Info", "Quit"]


def make_controller(context, answers):
    ui = ScriptedUI(answers)
    return SessionController(context, ui, SETTINGS, sleep=lambda s: None), ui


class TestRoles:
    def test_sender_matching_admin_is_admin(self):
        assert determine_role(Sender(address=ADMIN), ADMIN) == Role.ADMIN

    def test_other_sender_is_viewer(self):
        assert determine_role(Sender(address=OTHER), ADMIN) == Role.VIEWER

    def test_missing_admin_makes_sender_viewer(self):
        assert determine_role(Sender(address=OTHER), None) == Role.VIEWER

    def test_no_sender_defaults_to_admin(self):
        assert determine_role(Sender(), ADMIN) == Role.ADMIN

    def test_menus(self):
        assert [a.value for a in actions_for_role(Role.ADMIN)] == ADMIN_MENU
        assert [a.value for a in actions_for_role(Role.VIEWER)] == VIEWER_MENU


def test_admin_session_mints_and_quits(sandbox, make_context):
    controller, ui = make_controller(
        make_context(), [MINTER, "Mint", None, "50", True, "Quit"]
    )

    reports = controller.run()

    assert controller.role == Role.ADMIN
    assert controller.state == SessionState.EXIT
    assert ui.choices[0] == ADMIN_MENU
    assert [r.outcome for r in reports] == [ActionOutcome.APPLIED]
    assert "Current wallet is minter admin!" in ui.output
    assert controller.ref.address == MINTER


def test_viewer_session_only_sees_info_and_quit(sandbox, make_context):
    controller, ui = make_controller(
        make_context(sender_address=OTHER), [MINTER, "Info", "No", "Quit"]
    )

    reports = controller.run()

    assert controller.role == Role.VIEWER
    assert ui.choices == [VIEWER_MENU, ["Yes", "No"], VIEWER_MENU]
    assert reports == []
    assert "Available actions restricted" in ui.output
    assert sandbox.submitted == []


def test_viewer_cannot_pick_mint(sandbox, make_context):
    controller, ui = make_controller(make_context(sender_address=OTHER), [MINTER, "Mint"])

    with pytest.raises(ValueError):
        controller.run()

    assert sandbox.submitted == []


def test_dry_run_session_without_sender_is_admin(sandbox, make_context):
    controller, ui = make_controller(make_context(sender_address=None), [MINTER, "Quit"])

    controller.run()

    assert controller.role == Role.ADMIN
    assert ui.choices == [ADMIN_MENU]


def test_inactive_contract_reprompts(sandbox, make_context):
    unknown = Address.parse("0:" + "bb" * 32)
    frozen = Address.parse("0:" + "cc" * 32)
    sandbox.deploy(frozen, SandboxMinter(admin=ADMIN, status=ContractStatus.FROZEN))
    controller, ui = make_controller(make_context(), [unknown, frozen, MINTER, "Quit"])

    controller.run()

    assert ui.output.count("This contract is not active!") == 2
    assert controller.ref.address == MINTER


def test_code_mismatch_declined_returns_to_target_selection(sandbox, make_context):
    controller, ui = make_controller(
        make_context(expected_code=b"newer-build"), [MINTER, "No", MINTER, "Yes", "Quit"]
    )

    controller.run()

    assert ui.output.count("Contract code differs") == 2
    assert ui.choices[:2] == [["Yes", "No"], ["Yes", "No"]]
    assert controller.role == Role.ADMIN


def test_code_check_skipped_without_expected_code(sandbox, make_context):
    controller, ui = make_controller(make_context(expected_code=None), [MINTER, "Quit"])

    controller.run()

    assert "Contract code differs" not in ui.output


def test_fatal_error_propagates(sandbox, make_context):
    sandbox.minter(MINTER).last_lt = None
    controller, ui = make_controller(
        make_context(), [MINTER, "Change admin", OTHER, True]
    )

    with pytest.raises(NoHistoryError):
        controller.run()

    assert sandbox.submitted == []


def test_step_rejects_illegal_transition(make_context):
    controller, ui = make_controller(make_context(), [])
    controller.state = SessionState.BIND_SESSION
    controller._handlers[SessionState.BIND_SESSION] = lambda: SessionState.EXIT

    with pytest.raises(RuntimeError, match="Illegal session transition"):
        controller.step()


def test_exit_is_only_reachable_from_action_loop():
    sources = [s for s, targets in TRANSITIONS.items() if SessionState.EXIT in targets]
    assert sources == [SessionState.ACTION_LOOP]


def test_select_target_uses_ledger_state(make_context):
    ledger = ScriptedLedger([7], status=ContractStatus.UNINIT, code=None)
    controller, ui = make_controller(make_context(ledger=ledger), [MINTER])

    assert controller.step() == SessionState.SELECT_TARGET
    assert ledger.reads == 1
