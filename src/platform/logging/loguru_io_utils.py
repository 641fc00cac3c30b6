from inspect import getfullargspec, unwrap
from os.path import basename
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 500
MASK = '********'


def get_chain_start_time() -> float:
    """Start time of the outermost traced call in the current context"""
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def reset_call_depth() -> None:
    depth = call_depth_var.get() - 1
    call_depth_var.set(depth)
    if depth <= 0:
        chain_start_time_var.set(0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    """`file.py::Qualified.name:line` of the traced function"""
    code = getattr(func, '__func__', func).__code__
    return f'{basename(code.co_filename)}::{func.__qualname__}:{code.co_firstlineno}'


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop arguments `func` cannot take: unknown keywords and surplus positionals"""
    spec = getfullargspec(unwrap(func))

    if not spec.varkw:
        accepted = set(spec.args) | set(spec.kwonlyargs)
        kwargs = {key: value for key, value in kwargs.items() if key in accepted}

    if not spec.varargs:
        positional = [name for name in spec.args if name not in kwargs]
        args = args[: len(positional)]

    return args, kwargs


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any) -> Any:
    text = str(data)
    if len(text) <= MAX_CONTENT_LENGTH:
        return data
    return f'{text[:MAX_CONTENT_LENGTH]}...(+{len(text) - MAX_CONTENT_LENGTH} chars)'


def mask_sensitive(data: Any) -> Any:
    """Mask values stored under sensitive keys (recursively), then truncate"""
    if isinstance(data, dict):
        masked: Any = {key: mask_sensitive(should_mask_keyword(key, value)) for key, value in data.items()}
    elif isinstance(data, list | tuple):
        masked = type(data)(mask_sensitive(item) for item in data)
    else:
        masked = data
    return truncate_content(masked)
