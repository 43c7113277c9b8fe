# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import json

import pytest

from cachemtime import constants
from cachemtime.utils import create_temp_folder


@pytest.fixture
def config_path(monkeypatch):
    with create_temp_folder() as temp_folder:
        path = temp_folder / 'config.json'
        monkeypatch.setattr(constants, 'config_path', path)
        constants.read_config.cache_clear()
        yield path
    constants.read_config.cache_clear()


def test_missing_config(config_path):
    assert not config_path.exists()
    assert constants.read_config() == {}
    assert constants.get_default_stat_frequency_ms() == \
                                                constants.DEFAULT_STAT_FREQUENCY_MS == 10


def test_config(config_path):
    config_path.write_text(json.dumps({'stat_frequency_ms': 2.5, 'other': 'thing'}))
    config = constants.read_config()
    assert config == {'stat_frequency_ms': 2.5, 'other': 'thing'}
    assert constants.read_config() is config
    with pytest.raises(TypeError):
        config['stat_frequency_ms'] = 3
    assert constants.get_default_stat_frequency_ms() == 2.5


def test_config_is_cached_until_cleared(config_path):
    assert constants.get_default_stat_frequency_ms() == 10
    config_path.write_text('{"stat_frequency_ms": -1}')
    assert constants.get_default_stat_frequency_ms() == 10
    constants.read_config.cache_clear()
    assert constants.get_default_stat_frequency_ms() == -1


@pytest.mark.parametrize('bad_value', ['fast', True, None, [10]])
def test_bad_stat_frequency(config_path, bad_value):
    config_path.write_text(json.dumps({'stat_frequency_ms': bad_value}))
    with pytest.raises(TypeError):
        constants.get_default_stat_frequency_ms()


def test_malformed_config(config_path):
    config_path.write_text('{not json')
    with pytest.raises(json.JSONDecodeError):
        constants.read_config()
