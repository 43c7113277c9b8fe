# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Memoizing functions of a path, forgetting results when the file changes.

`cached_mtime` wraps a function like `read_text(path)`. Before each call it
checks the path's modification time, and if that changed since the result was
computed, the result is dropped from the cache and computed again. Checking
means calling `os.stat`, so checks of the same path are spaced at least
`stat_frequency_ms` milliseconds apart; within that window a change on disk
goes unnoticed and the old result is served.

Two stores are involved, both exposed as attributes and both yours to share,
pre-seed or edit:

 - `cache`: path -> result, same as for `cached`.
 - `mtime_cache`: path -> `MtimeStamp(mtime, checked_at)`. Entries you seed
   yourself can be plain `(mtime, checked_at)` tuples.

If the path can't be stat-ed, for example because it was deleted, both entries
are dropped and `get_mtime` returns `None`. The function is still called after
that, and whatever it raises goes to the caller.
'''

from __future__ import annotations

import os
import logging
import time as time_module
from typing import Callable, NamedTuple, Optional, TypeVar, Union

from . import constants
from .caching import CachedFunction
from .storing import MapLike


logger = logging.getLogger(__name__)

_Result = TypeVar('_Result')


class MtimeStamp(NamedTuple):
    mtime: int
    checked_at: float


def get_monotonic_ms() -> float:
    return time_module.monotonic() * 1_000


class MtimeCachedFunction(CachedFunction[_Result]):

    def __init__(self, function: Callable[[str], _Result],
                 stat_frequency_ms: Optional[float] = None,
                 cache: Optional[MapLike[str, _Result]] = None,
                 mtime_cache: Optional[MapLike[str, MtimeStamp]] = None) -> None:
        CachedFunction.__init__(self, function, cache)
        self.stat_frequency_ms = (constants.get_default_stat_frequency_ms()
                                  if stat_frequency_ms is None else stat_frequency_ms)
        self.mtime_cache: MapLike[str, MtimeStamp] = \
                                            {} if mtime_cache is None else mtime_cache

    def get_mtime(self, path: Union[str, os.PathLike]) -> Optional[int]:
        '''
        Get the modification time of `path`, stat-ing it only if it's due.

        Returns `st_mtime_ns`, or `None` if the path couldn't be stat-ed. Drops
        the cached result for `path` if the modification time changed.
        '''
        path = os.fspath(path)
        now = get_monotonic_ms()
        if path in self.mtime_cache:
            # Any `(mtime, checked_at)` pair will do, not just an `MtimeStamp`.
            known_mtime, checked_at = self.mtime_cache[path]
        else:
            # Old enough to be checked right away, whatever the frequency's sign.
            known_mtime, checked_at = 0, -self.stat_frequency_ms

        if now - checked_at <= self.stat_frequency_ms:
            return known_mtime

        try:
            mtime = os.stat(path).st_mtime_ns
        except (OSError, ValueError) as exception:
            logger.debug(f'Could not stat {path!r}, forgetting it: {exception!r}')
            self.mtime_cache.pop(path, None)
            self.cache.pop(path, None)
            return None

        if mtime != known_mtime:
            if path in self.cache:
                logger.debug(f'{path!r} was modified, dropping its cached result.')
            self.cache.pop(path, None)
        self.mtime_cache[path] = MtimeStamp(mtime, now)
        return mtime

    def __call__(self, path: Union[str, os.PathLike]) -> _Result:
        path = os.fspath(path)
        self.get_mtime(path)
        return CachedFunction.__call__(self, path)


def cached_mtime(function: Callable[[str], _Result],
                 stat_frequency_ms: Optional[float] = None,
                 cache: Optional[MapLike[str, _Result]] = None,
                 mtime_cache: Optional[MapLike[str, MtimeStamp]] = None
                 ) -> MtimeCachedFunction[_Result]:
    '''
    Memoize `function(path)`, recomputing when the file at `path` changes.

    `stat_frequency_ms` is the minimum time between two `os.stat` calls for the
    same path. It defaults to 10, or to `stat_frequency_ms` in the config file.
    Pass a negative number to check on every call.
    '''
    return MtimeCachedFunction(function, stat_frequency_ms, cache, mtime_cache)
