# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''
Memoize functions of zero or one argument, optionally forgetting results when
the file they were computed from changes on disk.
'''

import collections

from . import utils
from . import constants
from .storing import MapLike, CuteUserDict, SelfLoggingDict, LruDict
from .weak_key_identity_dict import WeakKeyIdentityDict
from .caching import CachedFunction, cached
from .mtime_caching import (MtimeStamp, MtimeCachedFunction, cached_mtime,
                            get_monotonic_ms)

__VersionInfo = collections.namedtuple('VersionInfo',
                                       ('major', 'minor', 'micro'))

__version__ = '0.1.0'
__version_info__ = __VersionInfo(*(map(int, __version__.split('.'))))


del collections, __VersionInfo # Avoid polluting the namespace
