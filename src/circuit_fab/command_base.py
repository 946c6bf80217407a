"""Shared machinery for the Gerber and Excellon command models.

Each command is a frozen pydantic model with a literal ``command_code``. A
builder maps human-readable command names (``"move_operation"``,
``"define_tool"``, ...) to those models, validates the keyword parameters at
append time and returns an immutable tuple from :meth:`CommandBuilder.build`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import SchemaValidationError


class CommandModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)


CommandT = TypeVar("CommandT", bound=CommandModel)
BuilderT = TypeVar("BuilderT", bound="CommandBuilder[Any]")


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ``ValidationError`` into ``"path: message"`` strings."""
    messages = []
    for error in exc.errors():
        path = ".".join(str(p) for p in error["loc"]) or "(root)"
        messages.append(f"{path}: {error['msg']}")
    return messages


class CommandBuilder(Generic[CommandT]):
    """Append-only, validating accumulator of commands.

    Subclasses set :attr:`commands_by_name`. ``add`` returns the builder so
    calls can be chained; the first invalid command raises
    :class:`~circuit_fab.errors.SchemaValidationError`.
    """

    commands_by_name: ClassVar[Mapping[str, type[CommandModel]]] = {}

    def __init__(self) -> None:
        self._commands: list[CommandT] = []

    def add(self: BuilderT, name: str, /, **params: Any) -> BuilderT:
        model = self.commands_by_name.get(name)
        if model is None:
            raise SchemaValidationError(name, [f"unknown command; expected one of {sorted(self.commands_by_name)}"])
        try:
            command = model.model_validate(params)
        except ValidationError as exc:
            raise SchemaValidationError(name, validation_messages(exc)) from exc
        self._commands.append(command)  # type: ignore[arg-type]
        return self

    def extend(self: BuilderT, commands: Iterable[CommandT]) -> BuilderT:
        """Append already validated commands."""
        self._commands.extend(commands)
        return self

    def build(self) -> tuple[CommandT, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
