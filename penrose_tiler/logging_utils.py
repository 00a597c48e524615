from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6


def _safe_repr(value: Any, *, max_length: int = 240) -> str:
    if isinstance(value, np.ndarray):
        if value.size <= 8:
            return "array(" + np.array2string(value, precision=3, separator=", ").replace("\n", "") + ")"
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if isinstance(value, (list, tuple)) and len(value) > 6:
        return f"<{type(value).__name__} of {len(value)} items>"
    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - repr of foreign objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "..."
    return rendered


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)
        params = list(inspect.signature(func).parameters)
        skip_first = bool(params) and params[0] in ("self", "cls")

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            shown = [_safe_repr(arg) for arg in (args[1:] if skip_first else args)]
            shown.extend(f"{key}={_safe_repr(val)}" for key, val in kwargs.items())
            logger.debug("-> %s(%s)", qualname, ", ".join(shown))
            result = func(*args, **kwargs)
            if log_result:
                logger.debug("<- %s = %s", qualname, _safe_repr(result))
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the functions and class methods defined in ``namespace`` with DEBUG traces."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module_name))
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set or getattr(value, "__module__", None) != module_name:
            continue
        if inspect.isfunction(value):
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif inspect.isclass(value):
            for attr_name, attr_value in list(vars(value).items()):
                qualified = f"{value.__name__}.{attr_name}"
                if attr_name.startswith("__") or qualified in skip_set:
                    continue
                if inspect.isfunction(attr_value):
                    setattr(value, attr_name, debug_log_call(logger, name=qualified)(attr_value))
