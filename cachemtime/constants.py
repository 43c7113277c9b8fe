# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import pathlib
import numbers
import functools
import json

from immutabledict import immutabledict as ImmutableDict


DEFAULT_STAT_FREQUENCY_MS = 10


@functools.cache
def read_config() -> ImmutableDict:
    try:
        content = config_path.read_text()
    except FileNotFoundError:
        return ImmutableDict()
    return ImmutableDict(json.loads(content))


def get_default_stat_frequency_ms() -> float:
    stat_frequency_ms = read_config().get('stat_frequency_ms',
                                          DEFAULT_STAT_FREQUENCY_MS)
    if isinstance(stat_frequency_ms, bool) or \
                                     not isinstance(stat_frequency_ms, numbers.Real):
        raise TypeError(f'`stat_frequency_ms` in {config_path} must be a number, '
                        f'got {stat_frequency_ms!r}.')
    return stat_frequency_ms


cachemtime_folder: pathlib.Path = pathlib.Path.home() / '.cachemtime'
config_path: pathlib.Path = cachemtime_folder / 'config.json'
logs_folder: pathlib.Path = cachemtime_folder / 'logs'
