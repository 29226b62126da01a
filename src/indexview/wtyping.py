import typing as tp


@tp.runtime_checkable
class SupportsStep[T](tp.Protocol):
    """Anything that can be read and stepped forward, the least a position needs."""

    def get(self) -> T: ...

    def advance(self) -> None: ...


@tp.runtime_checkable
class Cursor[T](SupportsStep[T], tp.Protocol):
    """Position marker into a source: read, step forward, compare to a limit."""

    yields_references: tp.ClassVar[bool]

    def __copy__(self) -> tp.Self: ...

    def __eq__(self, other: object, /) -> bool: ...


@tp.runtime_checkable
class WritableCursor[T](SupportsStep[T], tp.Protocol):
    def set(self, value: T, /) -> None: ...


@tp.runtime_checkable
class SupportsRange[T](tp.Protocol):
    def begin(self) -> Cursor[T]: ...

    def end(self) -> object: ...


@tp.runtime_checkable
class SupportsClose(tp.Protocol):
    def close(self) -> None: ...
