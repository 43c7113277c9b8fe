# Copyright 2009-2017 Ram Rachum.
# This program is distributed under the MIT license.

'''
Defines the `WeakKeyIdentityDict` class.

See its documentation for more details.
'''

from __future__ import annotations

import weakref
import collections.abc
from typing import Any, Iterator


__all__ = ['WeakKeyIdentityDict']


class IdentityRef(weakref.ref):
    '''A weak reference to an object, hashed by identity and not contents.'''

    def __init__(self, thing, callback=None):
        weakref.ref.__init__(self, thing, callback)
        self._hash = id(thing)

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, IdentityRef):
            return NotImplemented
        if self is other:
            return True
        thing = self()
        # A dead reference only equals itself.
        return thing is not None and thing is other()

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result


class WeakKeyIdentityDict(collections.abc.MutableMapping):
    """
    A weak key dictionary which cares about the keys' identities.

    This is a fork of `weakref.WeakKeyDictionary`. Like in the original
    `WeakKeyDictionary`, the keys are referenced weakly, so if there are no
    more references to the key, it gets removed from this dict.

    The difference is that `WeakKeyIdentityDict` cares about the keys'
    identities and not their contents, so even unhashable objects can be used
    as keys, as long as they can be weakly referenced. (Instances of your own
    classes can; plain `list` and `dict` objects can't, but their subclasses
    can.) The value will be tied to the object's identity and not its contents;
    the keys' own `__eq__` is never called. Looking up, storing or popping a
    key that can't be weakly referenced raises `TypeError`.

    Use it as the store of a cached function to memoize on arguments that
    can't be hashed:

        summarize = cached(summarize, WeakKeyIdentityDict())

    """

    def __init__(self, dict_=None):
        self.data = {}
        def remove(k, selfref=weakref.ref(self)):
            self = selfref()
            if self is not None:
                self.data.pop(k, None)
        self._remove = remove
        if dict_ is not None:
            self.update(dict_)

    def __delitem__(self, key):
        del self.data[IdentityRef(key)]

    def __getitem__(self, key):
        return self.data[IdentityRef(key)]

    def __setitem__(self, key, value):
        self.data[IdentityRef(key, self._remove)] = value

    def __contains__(self, key) -> bool:
        return IdentityRef(key) in self.data

    def __iter__(self) -> Iterator[Any]:
        for wr in list(self.data):
            obj = wr()
            if obj is not None:
                yield obj

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return f'<WeakKeyIdentityDict at {id(self)}>'

    def copy(self) -> WeakKeyIdentityDict:
        new = WeakKeyIdentityDict()
        for key, value in self.items():
            new[key] = value
        return new

    def get(self, key, default=None):
        return self.data.get(IdentityRef(key), default)

    def pop(self, key, *args):
        return self.data.pop(IdentityRef(key), *args)
