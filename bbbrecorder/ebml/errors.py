"""Error type for failed EBML parsing, with chained-cause matching."""

from __future__ import annotations

from typing import Any


class EbmlError(Exception):
    """An error that records what failed and the underlying reason."""

    def __init__(self, err: Any, failure: str) -> None:
        super().__init__(failure, err)
        self.err = err
        self.failure = failure
        if isinstance(err, BaseException):
            self.__cause__ = err

    def __str__(self) -> str:
        if self.err is None:
            return self.failure
        return f"{self.failure}: {self.err}"

    def unwrap(self) -> Any:
        """Return the reason of the failure."""
        return self.err

    def matches(self, target: Any) -> bool:
        """Whether ``target`` is this error or appears in its cause chain.

        ``target`` may be an exception instance, matched by identity, or an
        exception class, matched with ``isinstance``. ``None`` matches when
        there is no underlying reason.
        """
        if target is self:
            return True
        if target is None:
            return self.err is None

        is_class = isinstance(target, type) and issubclass(target, BaseException)
        if is_class and isinstance(self, target):
            return True

        err = self.err
        seen: set[int] = set()
        while err is not None:
            if err is target or (is_class and isinstance(err, target)):
                return True
            if id(err) in seen:
                return False
            seen.add(id(err))
            unwrap = getattr(err, "unwrap", None)
            if callable(unwrap):
                err = unwrap()
            elif hasattr(err, "err"):
                err = err.err
            else:
                return False
        return False


def wrap_error(err: Any, failure: str) -> EbmlError:
    """Wrap ``err`` with a description of what failed."""
    return EbmlError(err, failure)


def wrap_errorf(err: Any, failure_fmt: str, *args: Any) -> EbmlError:
    """Wrap ``err`` with a ``%``-formatted description of what failed."""
    failure = failure_fmt % args if args else failure_fmt
    return wrap_error(err, failure)