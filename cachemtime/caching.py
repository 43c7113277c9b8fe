# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Memoizing functions of zero or one argument.

    >>> square = cached(lambda x: x * x)
    >>> square(2)
    4
    >>> square.cache
    {2: 4}

The store is yours: pass any `MapLike` as `cache` and the cached function will
read and write through it. Whatever the function returns is what gets stored,
including a coroutine or a future that hasn't finished yet, which is never
awaited. Exceptions raised by the function go straight to the caller and
nothing is stored for them.
'''

from __future__ import annotations

import functools
from typing import Any, Callable, Generic, Optional, TypeVar

from .storing import MapLike


_Result = TypeVar('_Result')


class CachedFunction(Generic[_Result]):
    '''
    A function wrapped so that each distinct argument is computed only once.

    A call with no argument is stored under the key `None`.
    '''

    def __init__(self, function: Callable[..., _Result],
                 cache: Optional[MapLike[Any, _Result]] = None) -> None:
        functools.update_wrapper(self, function)
        self.function = function
        self.cache: MapLike[Any, _Result] = {} if cache is None else cache

    def __call__(self, *args: Any) -> _Result:
        if len(args) >= 2:
            raise TypeError(f'{self!r} takes at most one argument, got '
                            f'{len(args)}.')
        key = args[0] if args else None
        if key in self.cache:
            return self.cache[key]
        result = self.function(*args)
        self.cache[key] = result
        return result

    def __repr__(self) -> str:
        name = getattr(self.function, '__qualname__', None) or repr(self.function)
        return f'{type(self).__name__}({name})'


def cached(function: Callable[..., _Result],
           cache: Optional[MapLike[Any, _Result]] = None) -> CachedFunction[_Result]:
    '''
    Memoize `function`, which takes zero or one argument.

    Works as a decorator too. `cache` defaults to a new `dict`; it's available
    as the `.cache` attribute of the result.
    '''
    return CachedFunction(function, cache)
