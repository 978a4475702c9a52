# dateinput/session.py
"""
Restoration of previously submitted input values.

The host application installs a ``RestoreContext`` (for example when a
bookmarked page is reloaded) and widgets built inside it pick up the saved
value for their id instead of their configured default. ContextVars keep the
active context per thread and per async task.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Mapping, Optional

_MISSING = object()


class RestoreContext:
    """
    Saved input values keyed by input id.

    :param values: Mapping of input id to the value the client last submitted.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def has(self, input_id: str) -> bool:
        return input_id in self._values

    def get(self, input_id: str, default: Any = None) -> Any:
        return self._values.get(input_id, default)

    def __repr__(self):
        return f"RestoreContext(ids={sorted(self._values)!r})"


_current_restore_context: ContextVar[Optional[RestoreContext]] = ContextVar(
    "dateinput_restore_context", default=None
)


def get_restore_context() -> Optional[RestoreContext]:
    return _current_restore_context.get()


@contextmanager
def restore_context(values: Any) -> Iterator[RestoreContext]:
    """Activate a RestoreContext (or a plain mapping of values) for the block."""
    ctx = values if isinstance(values, RestoreContext) else RestoreContext(values)
    token = _current_restore_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_restore_context.reset(token)


def restore_input(input_id: str, default: Any) -> Any:
    """Return the saved value for ``input_id`` in the active context, else ``default``."""
    ctx = get_restore_context()
    if ctx is None:
        return default
    value = ctx.get(input_id, _MISSING)
    return default if value is _MISSING else value
