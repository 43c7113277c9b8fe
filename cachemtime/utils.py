# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''A collection of general-purpose tools.'''

from __future__ import annotations

import os
import tempfile
import shutil
import pathlib
import contextlib
import datetime as datetime_module
from typing import Iterator, Union


@contextlib.contextmanager
def create_temp_folder(prefix: str = tempfile.template) -> Iterator[pathlib.Path]:
    '''
    Give a scratch folder for files whose modification times we play with.

        with create_temp_folder() as temp_folder:
            (temp_folder / 'notes.txt').write_text('hi')

    The folder and everything in it is gone after the `with` block.
    '''
    temp_folder = pathlib.Path(tempfile.mkdtemp(prefix=prefix))
    try:
        yield temp_folder
    finally:
        shutil.rmtree(temp_folder)


def touch_mtime(path: Union[str, os.PathLike],
                when: datetime_module.datetime) -> None:
    '''Set both the access and modification times of `path` to `when`.'''
    timestamp_ns = int(when.timestamp()) * 10 ** 9 + when.microsecond * 1_000
    os.utime(path, ns=(timestamp_ns, timestamp_ns))
