"""Scripted implementation of the operator prompt layer.

Replays prepared answers instead of reading a terminal and records every
message and prompt. Useful for unit tests and for driving non-interactive
sandbox runs.
"""

from collections import deque
from typing import Any, Iterable, Optional, Sequence

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import to_nano
from jetton_minter_console.models.base import NanoAmount
from jetton_minter_console.ports.ui import ConsoleUI


class ScriptExhausted(AssertionError):
    """Raised when a prompt is reached after all answers were consumed."""


class ScriptedUI(ConsoleUI):
    """ConsoleUI that answers prompts from a prepared script.

    Answers are consumed in order. Addresses may be given as strings or
    Address objects, amounts as decimal strings or nano integers, and
    ``None`` for an address prompt selects the prompt's default.
    """

    def __init__(self, answers: Iterable[Any] = ()):
        self._answers = deque(answers)
        self.messages: list[str] = []
        self.prompts: list[str] = []
        self.choices: list[list[str]] = []

    def feed(self, *answers: Any) -> None:
        self._answers.extend(answers)

    @property
    def output(self) -> str:
        return "".join(self.messages)

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def _next(self, message: str) -> Any:
        self.prompts.append(message)
        if not self._answers:
            raise ScriptExhausted(f"No scripted answer for prompt: {message}")
        return self._answers.popleft()

    def prompt_address(
        self, message: str, default: Optional[Address] = None
    ) -> Address:
        answer = self._next(message)
        if answer is None:
            if default is None:
                raise ScriptExhausted(f"No default for prompt: {message}")
            return default
        if isinstance(answer, Address):
            return answer
        return Address.parse(answer)

    def prompt_amount(self, message: str) -> NanoAmount:
        answer = self._next(message)
        if isinstance(answer, int):
            return answer
        return to_nano(answer)

    def prompt_url(self, message: str) -> str:
        return str(self._next(message))

    def confirm(self, message: str) -> bool:
        return bool(self._next(message))

    def choose(self, message: str, options: Sequence[str]) -> str:
        self.choices.append(list(options))
        answer = self._next(message)
        if answer not in options:
            raise ValueError(f"Scripted choice {answer!r} not in {list(options)}")
        return answer

    def write(self, message: str) -> None:
        self.messages.append(message)
