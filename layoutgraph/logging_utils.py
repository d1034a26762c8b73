from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxdict = 8
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxset = 8


def _summarize_array(value: np.ndarray, max_items: int) -> str:
    parts = [f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"]
    if value.size == 0:
        return parts[0]
    if value.size <= max_items:
        parts.append(f"values={_repr.repr(value.tolist())}")
    elif np.issubdtype(value.dtype, np.number):
        finite = np.isfinite(value)
        if finite.any():
            parts.append(f"min={float(value[finite].min()):.6g}")
            parts.append(f"max={float(value[finite].max()):.6g}")
        if not finite.all():
            parts.append(f"non_finite={int((~finite).sum())}")
    return ", ".join(parts)


def safe_repr(value: Any, *, max_items: int = 6, max_length: int = 300) -> str:
    """Return a bounded representation of ``value`` for log records."""

    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)

    if isinstance(value, dict):
        items = []
        for idx, (key, val) in enumerate(value.items()):
            if idx >= max_items:
                items.append(f"... ({len(value)} total)")
                break
            items.append(f"{safe_repr(key)}: {safe_repr(val)}")
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (list, tuple)) and not hasattr(value, "_fields"):
        items = [safe_repr(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"... ({len(value)} total)")
        if isinstance(value, tuple):
            return "(" + ", ".join(items) + ")"
        return "[" + ", ".join(items) + "]"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [safe_repr(arg) for arg in args]
    parts.extend(f"{key}={safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls of the wrapped function at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _wrap_class_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("__") and attr_name.endswith("__"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, (staticmethod, classmethod)):
            func = attr_value.__func__
            if getattr(func, "__module__", None) != cls.__module__:
                continue
            wrapped = debug_log_call(logger, name=qualified)(func)
            setattr(cls, attr_name, type(attr_value)(wrapped))
        elif inspect.isfunction(attr_value) and attr_value.__module__ == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = True,
) -> None:
    """Wrap the functions and classes defined in ``namespace`` with DEBUG tracing."""

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):  # pragma: no cover
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif wrap_methods and inspect.isclass(value) and value.__module__ == module_name:
            _wrap_class_methods(value, logger, skip_set)


__all__ = ["apply_debug_logging", "debug_log_call", "safe_repr"]
