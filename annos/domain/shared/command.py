"""Command and CommandHandler base classes with an error boundary."""

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from functools import wraps
from typing import Any, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel

from annos.domain.shared.error import AnnosError, UnexpectedError
from annos.domain.shared.result import Err, Result

logger = logging.getLogger(__name__)


class Command(BaseModel): ...


class Response(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Response)

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
_HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]


def wrap_run_with_boundary(original_run: _HandlerMethod) -> _HandlerMethod:
    """Wrap run() so that no exception escapes the handler.

    Anything raised inside the handler is logged and returned as
    ``Err(UnexpectedError)``.
    """

    @wraps(original_run)
    async def boundary_run(self: Any, cmd: Any) -> Any:
        try:
            return await original_run(self, cmd)
        except Exception as e:
            logger.exception("Unhandled error in %s", type(self).__name__)
            return Err(UnexpectedError(e))

    return boundary_run


@dataclass_transform()
class _CommandHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass and the error boundary for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)

            original_run = cls.__dict__.get("run")
            if original_run is not None:
                cls.run = wrap_run_with_boundary(original_run)

        return cls


class CommandHandler(Generic[C, R], metaclass=_CommandHandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Dependencies are declared as fields:
        class MyHandler(CommandHandler[MyCmd, MyResponse]):
            repo: MyRepository

            async def run(self, cmd: MyCmd) -> Result[MyResponse, AnnosError]: ...
    """

    @abstractmethod
    async def run(self, cmd: C) -> Result[R, AnnosError]: ...
