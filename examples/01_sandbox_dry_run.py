"""Scripted dry run of the minter console against the sandbox ledger.

This example demonstrates how to:
1. Seed a sandbox ledger from a session file.
2. Drive a session with scripted operator answers.
3. Inspect the classified outcome of each action.
"""

from pathlib import Path

from jetton_minter_console.cli import build_sandbox_context
from jetton_minter_console.config import ConsoleSettings, SessionFile
from jetton_minter_console.session.controller import SessionController
from jetton_minter_console.ui.scripted import ScriptedUI


def run_example():
    session_file = SessionFile.load(Path(__file__).parent / "sandbox_session.yaml")
    context = build_sandbox_context(session_file)
    minter = session_file.contracts[0].address

    ui = ScriptedUI(
        [
            minter,
            # Mint 50 tokens to the sender, then quit
            "Mint", None, "50", True,
            "Info", "Yes",
            "Quit",
        ]
    )
    controller = SessionController(
        context, ui, ConsoleSettings(poll_interval=0.1)
    )
    reports = controller.run()

    print(ui.output)
    for report in reports:
        print(f"{report.action}: {report.outcome} after {report.attempts} reads")


if __name__ == "__main__":
    run_example()
