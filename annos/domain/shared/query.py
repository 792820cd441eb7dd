"""Query and QueryHandler base classes."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel

from annos.domain.shared.command import wrap_run_with_boundary
from annos.domain.shared.error import AnnosError
from annos.domain.shared.result import Result


class Query(BaseModel): ...


class QueryResult(BaseModel): ...


Q = TypeVar("Q", bound=Query)
R = TypeVar("R", bound=QueryResult)


@dataclass_transform()
class _QueryHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass and the error boundary for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)

            original_run = cls.__dict__.get("run")
            if original_run is not None:
                cls.run = wrap_run_with_boundary(original_run)

        return cls


class QueryHandler(Generic[Q, R], metaclass=_QueryHandlerMeta):
    """Base class for query handlers. Subclasses are automatically dataclasses."""

    @abstractmethod
    async def run(self, query: Q) -> Result[R, AnnosError]: ...
