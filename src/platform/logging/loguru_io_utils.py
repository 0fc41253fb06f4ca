from inspect import FullArgSpec, getfile, getfullargspec, getsourcelines
from os.path import basename
from re import sub
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


_MAX_CONTENT_LENGTH = 500
_SENSITIVE_PATTERN = r'(\b(?:' + '|'.join(sorted(SENSITIVE_KEYWORDS)) + r")\b)(=|': )'[^']*'"


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[Any, Any]]:
    """Drop kwargs the wrapped function does not accept (e.g. injected by FastAPI)."""
    if hasattr(func, '__wrapped__'):
        func = func.__wrapped__  # type: ignore
    full_arg_spec: FullArgSpec = getfullargspec(func)
    if not full_arg_spec.varkw:
        accepted = set(full_arg_spec.args) | set(full_arg_spec.kwonlyargs)
        kwargs = {k: v for k, v in kwargs.items() if k in accepted}
    return args, kwargs


def mask_sensitive(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            key: '********' if key in SENSITIVE_KEYWORDS else mask_sensitive(value)
            for key, value in data.items()
        }
    if isinstance(data, list | tuple):
        return type(data)(mask_sensitive(item) for item in data)

    text = str(data)
    masked = sub(_SENSITIVE_PATTERN, r"\1\2'********'", text)
    return data if masked == text else masked


def truncate_content(data: Any) -> Any:
    text = str(data)
    if len(text) <= _MAX_CONTENT_LENGTH:
        return data
    return f'{text[:_MAX_CONTENT_LENGTH]}... <{len(text) - _MAX_CONTENT_LENGTH} chars truncated>'
