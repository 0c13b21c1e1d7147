import logging
from typing import Callable, Dict, Sequence


class InferenceLogger:
    """Wraps a logging.Logger so that it's easy to use str.format syntax.

    Formatting is delayed until a handler actually emits the record, so
    debug traces of the unifier cost nothing when debug logging is off."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def debug(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        _log(self._logger.debug, format_string, args, kwargs)

    def info(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        _log(self._logger.info, format_string, args, kwargs)

    def warning(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        _log(self._logger.warning, format_string, args, kwargs)

    def error(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        _log(self._logger.error, format_string, args, kwargs)


def _log(
    logging_method: Callable,
    format_string: str,
    args: Sequence[object],
    kwargs: Dict[str, object],
) -> None:
    exc_info = None
    if 'exc_info' in kwargs:
        exc_info = kwargs['exc_info']
        del kwargs['exc_info']
    logging_method(
        _DelayedFormat(format_string, args, kwargs), exc_info=exc_info
    )


class _DelayedFormat:
    def __init__(
        self,
        format_string: str,
        args: Sequence[object],
        kwargs: Dict[str, object],
    ) -> None:
        self._format_string, self._args, self._kwargs = (
            format_string,
            args,
            kwargs,
        )

    def __str__(self) -> str:
        return self._format_string.format(*self._args, **self._kwargs)
