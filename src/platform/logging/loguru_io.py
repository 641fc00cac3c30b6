"""
Logger.io - trace a function's arguments, return value and exceptions

- args/kwargs and return value logged at DEBUG (only when settings.DEBUG)
- CustomBaseError logged at ERROR without traceback, anything else with traceback
- each exception is logged once, by the innermost traced call, then re-raised
- nested traced calls share a chain start time and call depth

Usage:
    @Logger.io
    async def create_reservation(self, *, user_id: int, ...) -> Reservation: ...

    Logger.base.info('📝 [CREATE-RESERVATION] ...')
"""

from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, TypeVar, cast

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    ExtraField,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
)


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger


_F = TypeVar('_F', bound=Callable[..., Any])

# Wrapper frames carry loguru's filename so loguru hides them from tracebacks
_LOGURU_FILENAME = cast(types.FunctionType, custom_logger.catch).__code__.co_filename


def _hide_from_traceback(wrapper: _F) -> _F:
    wrapper.__code__ = wrapper.__code__.replace(co_filename=_LOGURU_FILENAME)  # type: ignore[attr-defined]
    return wrapper


class LoguruIO:
    # log call -> wrapper -> caller
    depth = 2

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        self._logger = custom_logger.bind(
            **{ExtraField.CALL_TARGET: build_call_target_func_path(func)}
        )

    def _bound(self) -> 'LoguruLogger':
        return self._logger.bind(**{ExtraField.CHAIN_START_TIME: get_chain_start_time()}).opt(
            depth=self.depth
        )

    def _on_call(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        if settings.DEBUG:
            self._bound().debug(f'args: {mask_sensitive(args)}, kwargs: {mask_sensitive(kwargs)}')

    def _on_return(self, value: Any) -> None:
        if settings.DEBUG:
            self._bound().debug(f'return: {mask_sensitive(value)}')

    def _on_error(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        if isinstance(e, CustomBaseError):
            self._bound().error(f'{type(e).__name__}: {e}')
        else:
            self._bound().exception(f'{type(e).__name__}: {e}')

    def wrap(self) -> Callable[..., Any]:
        func = self.func

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self._on_call(args, kwargs)
                    call_args, call_kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    value = await func(*call_args, **call_kwargs)
                    self._on_return(value)
                    return value
                except Exception as e:
                    self._on_error(e)
                    raise
                finally:
                    reset_call_depth()

            return _hide_from_traceback(async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self._on_call(args, kwargs)
                call_args, call_kwargs = normalize_args_kwargs(func, *args, **kwargs)
                value = func(*call_args, **call_kwargs)
                self._on_return(value)
                return value
            except Exception as e:
                self._on_error(e)
                raise
            finally:
                reset_call_depth()

        return _hide_from_traceback(sync_wrapper)


class Logger:
    base = custom_logger

    @staticmethod
    def io(func: _F) -> _F:
        return cast(_F, LoguruIO(func).wrap())
