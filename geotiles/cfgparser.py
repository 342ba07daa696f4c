'''Module to parse and load the configuration file of the resolvers.
Main interface are load(), load_module(module)'''

import logging
import os
from os import path

import yaml

logger = logging.getLogger(__name__)

# Default config file ships next to this module, GEOTILES_CONFIG overrides it
FILENAME = path.join(path.dirname(path.realpath(__file__)), 'config.yml')
ENV_FILENAME = 'GEOTILES_CONFIG'

# Default values for dbhelper
DEFAULT_NODE_LIST = ['127.0.0.1']
DEFAULT_PORT = 9042
DEFAULT_KEY_SPACE = 'fortis'
DEFAULT_PREPARED_CACHE_SIZE = 256

# Default values for featureservice
DEFAULT_BASE_URL = 'http://localhost:3035'
DEFAULT_TIMEOUT = 30

# Default values for queries
DEFAULT_ZOOM_LEVEL = 15
DEFAULT_TILES_TABLE = 'computedtiles'
DEFAULT_MAX_LOCATIONS = 100


class ConfigError(Exception):
    '''Raised when the config file lacks a required module section'''


def __load_or_default(module, key, default_value, cfg):
    if module not in cfg:
        raise ConfigError('module %s not defined' % module)
    if key not in cfg[module]:
        logger.warning('%s does not appear in module cfg: %s! Using default value: %s',
                       key, module, default_value)
        cfg[module][key] = default_value
    return cfg


def __sanitize(cfg):
    # sanitize dbhelper
    cfg = __load_or_default('dbhelper', 'list of node', DEFAULT_NODE_LIST, cfg)
    cfg = __load_or_default('dbhelper', 'port', DEFAULT_PORT, cfg)
    cfg = __load_or_default('dbhelper', 'key space', DEFAULT_KEY_SPACE, cfg)
    cfg = __load_or_default('dbhelper', 'prepared cache size', DEFAULT_PREPARED_CACHE_SIZE, cfg)
    # sanitize featureservice
    cfg = __load_or_default('featureservice', 'base url', DEFAULT_BASE_URL, cfg)
    cfg = __load_or_default('featureservice', 'timeout', DEFAULT_TIMEOUT, cfg)
    # sanitize queries
    cfg = __load_or_default('queries', 'default zoom level', DEFAULT_ZOOM_LEVEL, cfg)
    cfg = __load_or_default('queries', 'tiles table', DEFAULT_TILES_TABLE, cfg)
    cfg = __load_or_default('queries', 'max locations', DEFAULT_MAX_LOCATIONS, cfg)
    return cfg


def __try_load(filename):
    if filename not in __try_load.cache:
        with open(filename, 'r') as cfg_file:
            cfg = yaml.safe_load(cfg_file) or {}
        __try_load.cache[filename] = __sanitize(cfg)
    return __try_load.cache[filename]


def load(filename=None):
    '''return yml obj. If the filename is specified, using the file.
    Otherwise using $GEOTILES_CONFIG or the packaged config.yml'''
    if filename is None:
        filename = os.environ.get(ENV_FILENAME, FILENAME)
    return __try_load(filename)


def load_module(module, filename=None):
    '''Given the module name, return yml obj for that specific module'''
    cfg = load(filename)
    if module not in cfg:
        raise ConfigError('module %s not defined' % module)
    return cfg[module]


def clear_cache():
    '''Forget every config file loaded so far'''
    __try_load.cache.clear()


# INIT
__try_load.cache = dict()
