"""Registry of reset hooks for module-level singletons.

Modules that build a global at import time (``config.settings.cfg``)
register a hook here so tests can rebuild them from a clean environment.
"""

from __future__ import annotations

from collections.abc import Callable

_reset_fns: list[Callable[[], None]] = []


def register_singleton(reset_fn: Callable[[], None]) -> None:
    _reset_fns.append(reset_fn)


def reset_all_singletons() -> None:
    """Run every registered reset hook in registration order."""
    for fn in _reset_fns:
        fn()
