"""Lightweight result type for store and client outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of an I/O operation that should not raise into the caller.

    Truthy on success.  A successful result carries its payload in *value*
    (which may legitimately be ``None``, e.g. a missing key); a failed one
    keeps the original exception in *error* for logging.

    Examples::

        r = await store.get_address()
        if not r:
            logger.warning("lookup failed: %s", r.message)
        address = r.value

        ok, msg = Result.fail("connection refused")
    """

    success: bool
    message: str = ""
    value: Any = field(default=None, repr=False)
    error: BaseException | None = field(default=None, repr=False)

    @classmethod
    def ok(cls, message: str = "", *, value: Any = None) -> Result:
        return cls(success=True, message=message, value=value)

    @classmethod
    def fail(cls, message: str = "", *, error: BaseException | None = None) -> Result:
        return cls(success=False, message=message, error=error)

    def __bool__(self) -> bool:
        return self.success

    def __iter__(self):
        yield self.success
        yield self.message
