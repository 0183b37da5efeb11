from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Mapping, TypeVar

from kindlog.domain import Record

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')
K = TypeVar('K')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def lookup(table: Mapping[K, T], key: Any) -> Maybe[T]:
    try:
        if key in table:
            return Some(table[key])
    except TypeError:
        # unhashable raw values never match a table key
        pass
    return Nothing()


def ensure_list(payload: Any) -> Either[dict, list]:
    if not isinstance(payload, list):
        return Left({
            "error": "not_a_list",
            "message": f"Expected a list of records, got {type(payload).__name__}",
            "payload": payload,
        })
    return Right(payload)


def ensure_objects(items: list) -> Either[dict, list]:
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            return Left({
                "error": "malformed_record",
                "message": f"Record at position {index} is {type(item).__name__}, not an object",
                "index": index,
            })
    return Right(items)


def parse_records(payload: Any) -> Either[dict, tuple[Record, ...]]:
    """Turn a decoded GET body into records, or an error dict describing why not."""
    return (
        ensure_list(payload)
        .bind(ensure_objects)
        .bind(lambda items: Right(tuple(Record.from_payload(i) for i in items)))
    )
