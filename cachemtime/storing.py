# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Backing stores for memoized functions.

Anything that supports `key in store`, `store[key]`, `store[key] = value` and
`store.pop(key, default)` can back a cached function. That's a plain `dict`,
which is the default, but it could also be one of the stores below, or any
mapping you bring yourself. The cached function mutates the store you gave it
in place, so you can pre-seed it, inspect it, or delete entries from it
whenever you like and the cached function will see your changes.
'''

from __future__ import annotations

import collections
import logging
from typing import Any, Hashable, Protocol, TypeVar, runtime_checkable


logger = logging.getLogger(__name__)

_Key = TypeVar('_Key')
_Value = TypeVar('_Value')


@runtime_checkable
class MapLike(Protocol[_Key, _Value]):
    '''The capability a backing store must have. `dict` has it.'''

    def __contains__(self, key: object) -> bool:
        ...

    def __getitem__(self, key: _Key) -> _Value:
        ...

    def __setitem__(self, key: _Key, value: _Value) -> None:
        ...

    def pop(self, key: _Key, default: Any = ...) -> Any:
        ...


class CuteUserDict(collections.UserDict):

    def __repr__(self) -> str:
        return f'{type(self).__name__}({collections.UserDict.__repr__(self)})'


class SelfLoggingDict(CuteUserDict):
    '''A store that logs every write and delete, for seeing what a cache does.'''

    def __setitem__(self, key: Hashable, value: Any) -> None:
        collections.UserDict.__setitem__(self, key, value)
        logger.debug(f'{type(self).__name__}[{key!r}] = {value!r}')

    def __delitem__(self, key: Hashable) -> None:
        collections.UserDict.__delitem__(self, key)
        logger.debug(f'del {type(self).__name__}[{key!r}]')


class LruDict(collections.OrderedDict):
    '''
    A bounded store: holds at most `max_size` results, dropping the stalest.

    Reading a result with `lru_dict[key]` or storing it makes it the freshest.
    A presence check with `in` doesn't, so a cached function's lookup counts
    once. Evictions are logged at DEBUG.
    '''

    def __init__(self, max_size: int, /, *args, **kwargs) -> None:
        if max_size < 1:
            raise ValueError(f'`max_size` must be at least 1, got {max_size}.')
        self.max_size = max_size
        super().__init__(*args, **kwargs)

    def __setitem__(self, key: Hashable, value: Any) -> None:
        super().__setitem__(key, value)
        self.move_to_end(key)
        while len(self) > self.max_size:
            evicted_key, _ = self.popitem(last=False)
            logger.debug(f'{type(self).__name__} is full, evicted {evicted_key!r}.')

    def __getitem__(self, key: Hashable) -> Any:
        self.move_to_end(key)
        return super().__getitem__(key)

    def __repr__(self) -> str:
        items = {key: super(LruDict, self).__getitem__(key) for key in tuple(self)}
        return f'{type(self).__name__}({self.max_size}, {items!r})'
