"""Execution of minter actions with settlement confirmation.

Every mutating action follows the same sequence: collect an approved intent,
capture the pre-state and the last transaction position, submit exactly one
request, poll until a newer transaction appears, then re-read the affected
value and compare it with the expected post-value.
"""

import time
from typing import Any, Callable, Optional

from jetton_minter_console.config import ConsoleSettings
from jetton_minter_console.execution.poller import await_settlement
from jetton_minter_console.execution.prompt_loop import (
    collect_confirmed_intent,
    collect_distinct_intent,
)
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import from_nano
from jetton_minter_console.models.enums import ActionOutcome, SettlementStatus
from jetton_minter_console.models.intent import (
    AdminChangeIntent,
    ContentChangeIntent,
    Intent,
    MintIntent,
)
from jetton_minter_console.models.jetton import JettonContent
from jetton_minter_console.models.report import ActionReport
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.ui import ConsoleUI
from jetton_minter_console.session.context import BoundSession

logger = get_logger(__name__)

CONFIRM_PROMPT = "Is it ok?(yes/no)"
UNCONFIRMED_MESSAGE = (
    "Failed to get indication of transaction completion from API!\n"
    "Check result manually, or try again\n"
)


class ActionOrchestrator:
    """
    Runs minter actions for a bound session and classifies their outcome.
    """

    def __init__(
        self,
        session: BoundSession,
        ui: ConsoleUI,
        settings: Optional[ConsoleSettings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session
        self._ui = ui
        self._settings = settings or ConsoleSettings()
        self._sleep = sleep

    @property
    def _binding(self):
        return self._session.binding

    def _confirm(self, intent: Intent) -> bool:
        self._ui.write(f"{intent.describe()}\nKindly double check it!\n")
        return self._ui.confirm(CONFIRM_PROMPT)

    def mint(self) -> ActionReport:
        def prompt() -> MintIntent:
            fallback = self._session.sender.address or self._binding.get_admin_address()
            to_address = self._ui.prompt_address(
                "Please specify address to mint to", default=fallback
            )
            amount = self._ui.prompt_amount(
                "Please provide mint amount in decimal form:"
            )
            return MintIntent(to_address=to_address, amount=amount)

        intent = collect_confirmed_intent(prompt, self._confirm)

        self._ui.write(f"Minting {from_nano(intent.amount)} to {intent.to_address}\n")
        supply_before = self._binding.get_total_supply()
        expected = supply_before + intent.amount

        return self._submit_and_verify(
            "mint",
            submit=lambda: self._binding.send_mint(
                self._session.sender,
                intent.to_address,
                intent.amount,
                self._settings.forward_ton_nano,
                self._settings.total_ton_nano,
            ),
            read_after=self._binding.get_total_supply,
            expected=expected,
            success_message=lambda supply: (
                f"Mint successful!\nCurrent supply:{from_nano(supply)}\n"
            ),
            failure_message="Mint failed!\n",
        )

    def change_admin(self) -> ActionReport:
        intent = collect_distinct_intent(
            self._binding.get_admin_address,
            lambda: self._ui.prompt_address("Please specify new admin address:"),
            self._confirm,
            AdminChangeIntent.against,
            self._ui,
            "Address specified matched current admin address!\nPlease pick another one.\n",
        )

        return self._submit_and_verify(
            "change_admin",
            submit=lambda: self._binding.send_change_admin(
                self._session.sender, intent.new_admin
            ),
            read_after=self._binding.get_admin_address,
            expected=intent.new_admin,
            success_message=lambda admin: f"Admin changed successfully to {admin}\n",
            failure_message="Admin address hasn't changed!\nSomething went wrong!\n",
        )

    def change_content(self) -> ActionReport:
        def prompt() -> JettonContent:
            url = self._ui.prompt_url(
                "Please specify new url pointing to jetton metadata(json):"
            )
            return JettonContent.offchain(url)

        intent = collect_distinct_intent(
            self._binding.get_content,
            prompt,
            self._confirm,
            ContentChangeIntent.against,
            self._ui,
            "Content url specified matched current content url!\nPlease pick another one.\n",
        )

        return self._submit_and_verify(
            "change_content",
            submit=lambda: self._binding.send_change_content(
                self._session.sender, intent.new_content
            ),
            read_after=self._binding.get_content,
            expected=intent.new_content,
            success_message=lambda content: f"Content changed successfully to {content}\n",
            failure_message="Content url hasn't changed!\nSomething went wrong!\n",
        )

    def info(self) -> None:
        data = self._binding.get_jetton_data()
        self._ui.write("Jetton info:\n\n")
        self._ui.write(f"Admin:{data.admin_address}\n")
        self._ui.write(f"Total supply:{from_nano(data.total_supply)}\n")
        self._ui.write(f"Mintable:{str(data.mintable).lower()}\n")
        if self._ui.choose("Display content?", ["Yes", "No"]) == "Yes":
            self._ui.write(data.content.describe())

    def _submit_and_verify(
        self,
        action: str,
        *,
        submit: Callable[[], None],
        read_after: Callable[[], Any],
        expected: Any,
        success_message: Callable[[Any], str],
        failure_message: str,
    ) -> ActionReport:
        state = self._session.ledger.get_contract_state(self._session.address)
        baseline = state.require_history()

        submit()
        logger.info(
            f"Submitted {action} to {self._session.address}",
            extra={
                "extra_fields": {
                    "event": "action_submitted",
                    "action": action,
                    "baseline_lt": baseline.lt,
                }
            },
        )

        settlement = await_settlement(
            self._session.ledger,
            self._session.address,
            baseline,
            max_attempts=self._settings.poll_attempts,
            interval=self._settings.poll_interval,
            sleep=self._sleep,
        )

        if settlement.status == SettlementStatus.EXHAUSTED:
            report = ActionReport(
                action=action,
                outcome=ActionOutcome.UNCONFIRMED,
                message=UNCONFIRMED_MESSAGE,
                expected=_display(expected),
                attempts=settlement.attempts,
            )
            logger.warning(
                f"Outcome of {action} is unknown after {settlement.attempts} attempts",
                extra={"extra_fields": _outcome_fields(report)},
            )
            self._ui.write(report.message)
            return report

        observed = read_after()
        if observed == expected:
            outcome = ActionOutcome.APPLIED
            message = success_message(observed)
        else:
            outcome = ActionOutcome.NO_VISIBLE_CHANGE
            message = failure_message

        report = ActionReport(
            action=action,
            outcome=outcome,
            message=message,
            expected=_display(expected),
            observed=_display(observed),
            attempts=settlement.attempts,
        )
        if outcome == ActionOutcome.APPLIED:
            logger.info(
                f"{action} applied", extra={"extra_fields": _outcome_fields(report)}
            )
        else:
            logger.warning(
                f"{action} confirmed without visible change",
                extra={"extra_fields": _outcome_fields(report)},
            )
        self._ui.write(report.message)
        return report


def _display(value: Any) -> Any:
    if isinstance(value, (Address, JettonContent)):
        return str(value)
    return value


def _outcome_fields(report: ActionReport) -> dict[str, Any]:
    return {
        "event": "action_outcome",
        "action": report.action,
        "outcome": report.outcome,
        "attempts": report.attempts,
        "expected": report.expected,
        "observed": report.observed,
    }
