# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import logging
import pathlib

import more_itertools
import pytest

from cachemtime import constants, logging_setup, cached_mtime
from cachemtime.utils import create_temp_folder


@pytest.fixture
def fresh_logging(monkeypatch):
    root_logger = logging.getLogger()
    old_handlers = root_logger.handlers[:]
    old_level = root_logger.level
    with create_temp_folder() as temp_folder:
        monkeypatch.setattr(constants, 'logs_folder', temp_folder / 'logs')
        monkeypatch.setattr(logging_setup, 'log_file_path', None)
        monkeypatch.setattr(logging_setup, 'did_logging_setup', False)
        monkeypatch.setattr(logging_setup, 'is_verbose', None)
        try:
            yield temp_folder
        finally:
            for handler in root_logger.handlers[:]:
                if handler not in old_handlers:
                    root_logger.removeHandler(handler)
                    handler.close()
            for handler in old_handlers:
                if handler not in root_logger.handlers:
                    root_logger.addHandler(handler)
            root_logger.setLevel(old_level)


def test_setup_to_file(fresh_logging):
    logging_setup.setup(verbose=True)
    log_file_path = logging_setup.log_file_path
    assert log_file_path.parent == constants.logs_folder
    assert log_file_path.suffix == '.log'
    assert logging_setup.get_logging_kwargs() == {
        'verbose': True,
        'log_to_file': True,
        'existing_log_file_path': log_file_path,
    }

    # Second call is a no-op:
    logging_setup.setup(verbose=False, log_to_file=False)
    assert logging_setup.get_logging_kwargs()['verbose'] is True

    with create_temp_folder() as temp_folder:
        path = temp_folder / 'file'
        path.write_text('contents')
        read = cached_mtime(lambda path: pathlib.Path(path).read_text(), -1)
        read(path)
        path.unlink()
        read.get_mtime(path)

    for handler in logging.getLogger().handlers:
        handler.flush()
    log_text = log_file_path.read_text()
    assert 'Log file:' in log_text
    assert 'Could not stat' in log_text


def test_setup_console_only(fresh_logging):
    logging_setup.setup(log_to_file=False)
    assert logging_setup.log_file_path is None
    assert not constants.logs_folder.exists()
    assert logging_setup.get_logging_kwargs() == {
        'verbose': False,
        'log_to_file': False,
        'existing_log_file_path': None,
    }
    console_handler = more_itertools.one(
        handler for handler in logging.getLogger().handlers
        if type(handler) is logging.StreamHandler
    )
    assert console_handler.level == logging.INFO


def test_existing_log_file(fresh_logging):
    existing_log_file_path = fresh_logging / 'parent.log'
    logging_setup.setup(existing_log_file_path=existing_log_file_path)
    assert logging_setup.log_file_path == existing_log_file_path
    assert not constants.logs_folder.exists()


def test_clean_logs_folder(fresh_logging, monkeypatch):
    monkeypatch.setattr(logging_setup, 'MAX_LOG_FILES_TO_KEEP', 3)
    constants.logs_folder.mkdir()
    for i in range(5):
        (constants.logs_folder / f'{i}.log').write_text(str(i))
    (constants.logs_folder / 'notes.txt').write_text('not a log')
    logging_setup.clean_logs_folder()
    remaining = sorted(path.name for path in constants.logs_folder.iterdir())
    assert len(remaining) == 3
    assert 'notes.txt' in remaining


def test_noisy_third_party_filter():
    noisy_third_party_filter = logging_setup.NoisyThirdPartyFilter()
    def make_record(name, level):
        return logging.LogRecord(name, level, __file__, 1, 'message', (), None)
    assert not noisy_third_party_filter.filter(make_record('asyncio', logging.DEBUG))
    assert not noisy_third_party_filter.filter(
        make_record('concurrent.futures.thread', logging.INFO)
    )
    assert noisy_third_party_filter.filter(make_record('asyncio', logging.WARNING))
    assert noisy_third_party_filter.filter(
        make_record('cachemtime.mtime_caching', logging.DEBUG)
    )
    assert noisy_third_party_filter.filter(make_record('asyncio_thing', logging.DEBUG))
