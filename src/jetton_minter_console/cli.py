"""CLI tool for administering a jetton minter."""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from jetton_minter_console.config import ConsoleSettings, SessionFile
from jetton_minter_console.errors import (
    AddressParseError,
    FatalConsoleError,
    LedgerClientError,
)
from jetton_minter_console.ledger.sandbox import SandboxLedger, SandboxMinterBinding
from jetton_minter_console.ledger.toncenter import ToncenterClient
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.ledger import Sender, hash_code
from jetton_minter_console.observability.logging import get_logger, setup_logging
from jetton_minter_console.session.context import SessionContext
from jetton_minter_console.session.controller import run_console
from jetton_minter_console.ui.terminal import TerminalUI

logger = get_logger(__name__)

app = typer.Typer(help="Jetton Minter Administration Console")


def get_settings() -> ConsoleSettings:
    return ConsoleSettings.from_env()


def get_ledger(settings: ConsoleSettings) -> ToncenterClient:
    return ToncenterClient(
        base_url=settings.toncenter_url,
        api_key=settings.toncenter_api_key,
        timeout=settings.request_timeout,
    )


def build_sandbox_context(session_file: SessionFile) -> SessionContext:
    ledger = SandboxLedger.from_session_file(session_file)
    return SessionContext(
        ledger=ledger,
        binding_factory=lambda address: SandboxMinterBinding(ledger, address),
        sender=Sender(address=session_file.sender),
        expected_code=session_file.expected_code,
    )


@app.command("console")
def console(
    session: Annotated[
        Path, typer.Option("--session", help="Path to the session YAML file")
    ],
    log_level: Annotated[
        Optional[str], typer.Option(help="Log level (defaults to LOG_LEVEL or WARNING)")
    ] = None,
):
    """Runs the interactive minter console."""
    setup_logging(log_level)
    try:
        settings = get_settings()
        session_file = SessionFile.load(session)
        context = build_sandbox_context(session_file)
        reports = run_console(context, TerminalUI(), settings)
    except (FatalConsoleError, LedgerClientError) as e:
        logger.error(f"Session aborted: {e}", extra={"extra_fields": {"event": "session_aborted"}})
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Session finished ({len(reports)} actions submitted).")


@app.command("state")
def state(
    address: Annotated[str, typer.Argument(help="Minter address")],
    expected_code: Annotated[
        Optional[Path],
        typer.Option(help="Path to the compiled minter code image"),
    ] = None,
):
    """Shows the on-ledger state of a contract."""
    setup_logging()
    try:
        target = Address.parse(address)
    except AddressParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if expected_code is not None and not expected_code.exists():
        typer.echo(f"Error: File not found: {expected_code}", err=True)
        raise typer.Exit(code=1)

    try:
        contract_state = get_ledger(get_settings()).get_contract_state(target)
    except (LedgerClientError, FatalConsoleError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    position = contract_state.last_position
    typer.echo(f"Address: {target}")
    typer.echo(f"Status: {contract_state.status.value}")
    typer.echo(f"Code hash: {contract_state.code_hash or '-'}")
    typer.echo(f"Last lt: {position.lt if position else '-'}")

    if expected_code is not None:
        local = expected_code.read_bytes()
        matches = contract_state.code == local
        typer.echo(
            f"Code matches {expected_code.name}: {'yes' if matches else 'no'} "
            f"(expected {hash_code(local)})"
        )


if __name__ == "__main__":
    app()
