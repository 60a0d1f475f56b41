"""Terminal implementation of the operator prompt layer."""

from typing import Optional, Sequence
from urllib.parse import urlparse

import typer

from jetton_minter_console.errors import AddressParseError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import to_nano
from jetton_minter_console.models.base import NanoAmount
from jetton_minter_console.ports.ui import ConsoleUI


class TerminalUI(ConsoleUI):
    """ConsoleUI on top of typer prompts.

    Every prompt re-asks until the input is syntactically valid.
    """

    def prompt_address(
        self, message: str, default: Optional[Address] = None
    ) -> Address:
        while True:
            text = typer.prompt(
                message, default=str(default) if default is not None else None
            )
            try:
                return Address.parse(text)
            except AddressParseError as e:
                typer.echo(f"Invalid address: {e}", err=True)

    def prompt_amount(self, message: str) -> NanoAmount:
        while True:
            text = typer.prompt(message)
            try:
                amount = to_nano(text)
            except ValueError as e:
                typer.echo(str(e), err=True)
                continue
            if amount <= 0:
                typer.echo("Amount must be positive", err=True)
                continue
            return amount

    def prompt_url(self, message: str) -> str:
        while True:
            text = typer.prompt(message).strip()
            parsed = urlparse(text)
            if parsed.scheme in ("http", "https") and parsed.netloc:
                return text
            typer.echo(f"Invalid url: {text}", err=True)

    def confirm(self, message: str) -> bool:
        return typer.confirm(message)

    def choose(self, message: str, options: Sequence[str]) -> str:
        typer.echo(message)
        for index, option in enumerate(options, start=1):
            typer.echo(f"  {index}. {option}")
        while True:
            answer = typer.prompt("Choice").strip()
            if answer in options:
                return answer
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            typer.echo(f"Please pick 1-{len(options)}", err=True)

    def write(self, message: str) -> None:
        typer.echo(message, nl=not message.endswith("\n"))
