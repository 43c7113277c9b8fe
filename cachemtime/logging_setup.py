# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Logging configuration for programs using `cachemtime`.

The library only logs through `logging.getLogger(__name__)` and never
configures anything on import. Call `setup()` from your program's entry point if
you want to see what the caches are doing: evictions are logged at DEBUG, so
pass `verbose=True` to see them on the console. The log file always gets them.
'''

from __future__ import annotations

import pathlib
import logging.config
import datetime as datetime_module
import re
import shlex
from typing import Optional


from . import constants


MAX_LOG_FILES_TO_KEEP = 100

log_file_path: Optional[pathlib.Path] = None
did_logging_setup: bool = False
is_verbose: Optional[bool] = None


NOISY_THIRD_PARTY_LOGGERS = ('asyncio', 'concurrent.futures')

class NoisyThirdPartyFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.WARNING:
            return True
        return not any(record.name == name or record.name.startswith(f'{name}.')
                       for name in NOISY_THIRD_PARTY_LOGGERS)


def clean_logs_folder() -> None:
    logs = sorted(constants.logs_folder.glob('*.log'),
                  key=lambda path: path.stat().st_mtime)
    for old_log in logs[: max(len(logs) - (MAX_LOG_FILES_TO_KEEP - 1), 0)]:
        old_log.unlink()


def _create_log_file_path() -> pathlib.Path:
    constants.logs_folder.mkdir(parents=True, exist_ok=True)
    clean_logs_folder()
    now = datetime_module.datetime.now()
    log_file_stem = re.sub('[^0-9]+', '-', now.isoformat(timespec='milliseconds'))
    assert re.fullmatch('[0-9-]+', log_file_stem)
    path = constants.logs_folder / f'{log_file_stem}.log'
    assert not path.exists()
    return path


def _build_config(verbose: bool, file_path: Optional[pathlib.Path]) -> dict:
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'DEBUG' if verbose else 'INFO',
            'formatter': 'simple',
            'filters': ('noisy_third_party_filter',),
        },
    }
    if file_path is not None:
        handlers['file'] = {
            'level': 'DEBUG',
            'class': 'logging.FileHandler',
            'filename': str(file_path),
            'mode': 'a',
            'formatter': 'verbose',
        }
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {
                'format': '{levelname} {asctime} {name} t{thread:d} | {message}',
                'style': '{',
            },
            'simple': {
                'format': '{name}: {message}',
                'style': '{',
            },
        },
        'filters': {
            'noisy_third_party_filter': {
                '()': NoisyThirdPartyFilter,
            },
        },
        'handlers': handlers,
        'root': {
            'handlers': tuple(handlers),
            'level': 'DEBUG',
        },
    }


def setup(*, verbose: bool = False, log_to_file: bool = True,
          existing_log_file_path: Optional[pathlib.Path] = None) -> None:
    '''
    Configure the root logger. Calling it a second time does nothing.

    With `log_to_file`, logs go to a new timestamped file in
    `constants.logs_folder`, or to `existing_log_file_path` if given, which is
    how a child process keeps writing to its parent's log.
    '''
    global log_file_path, did_logging_setup, is_verbose
    if did_logging_setup:
        return
    if log_to_file:
        log_file_path = (existing_log_file_path if existing_log_file_path is not None
                         else _create_log_file_path())
    else:
        assert existing_log_file_path is None
        log_file_path = None

    logging.config.dictConfig(_build_config(verbose, log_file_path))
    is_verbose = verbose
    did_logging_setup = True

    if log_to_file and existing_log_file_path is None:
        logging.getLogger(__name__).info(
            f'Log file: {shlex.quote(str(log_file_path))}'
        )


def get_logging_kwargs() -> dict:
    '''The arguments for `setup()` that would reproduce the current setup.'''
    assert did_logging_setup
    return {
        'verbose': is_verbose,
        'log_to_file': (log_file_path is not None),
        'existing_log_file_path': log_file_path,
    }
