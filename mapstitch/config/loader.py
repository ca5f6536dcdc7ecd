# This file is part of the MapStitch project.
# Copyright (C) 2026 The MapStitch Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration loading and system initializing.
"""
import os

from mapstitch.config.config import load_default_config, load_config, abspath
from mapstitch.config.validator import validate
from mapstitch.util.py import memoize
from mapstitch.util.yaml import load_yaml_file, YAMLError

import logging
log = logging.getLogger('mapstitch.config')


class ConfigurationError(Exception):
    pass


# environment variable, config section, config key, type
ENV_OVERRIDES = [
    ('MAPSTITCH_TILE_URL', 'tile_source', 'url', str),
    ('MAPSTITCH_TILE_TIMEOUT', 'tile_source', 'timeout', float),
    ('MAPSTITCH_CACHE_DIR', 'cache', 'base_dir', str),
    ('MAPSTITCH_QUEUE_SIZE', 'queue', 'size', int),
    ('MAPSTITCH_QUEUE_DELAY', 'queue', 'delay', float),
]


def load_env_overrides(conf, environ=None):
    """
    Overwrite configuration values with the ``MAPSTITCH_*`` environment
    variables that are set in `environ` (``os.environ`` by default).
    """
    if environ is None:
        environ = os.environ
    for env_name, section, key, type_func in ENV_OVERRIDES:
        if env_name not in environ:
            continue
        value = environ[env_name]
        try:
            value = type_func(value)
        except ValueError:
            raise ConfigurationError('invalid value for %s: %r is not %s' % (
                env_name, value, 'an int' if type_func is int else 'a float')) from None
        log.info('%s.%s set from %s', section, key, env_name)
        conf[section][key] = value
    return conf


def _check_config(conf, source):
    errors = validate(conf)
    for error in errors:
        log.warning(error)
    if errors:
        raise ConfigurationError('invalid configuration (%s): %s' % (source, '; '.join(errors)))


def load_configuration(mapstitch_conf=None, environ=None):
    """
    Load the configuration `mapstitch_conf` on top of the built-in
    defaults and apply the environment overrides. Without a configuration
    file, the defaults and the environment are used.

    :raises ConfigurationError: for unreadable or invalid configurations
    :rtype: `StaticMapConfiguration`
    """
    conf = load_default_config()

    if mapstitch_conf is not None:
        conf_base_dir = os.path.abspath(os.path.dirname(mapstitch_conf))
        log.info('reading: %s', mapstitch_conf)
        try:
            conf_dict = load_yaml_file(mapstitch_conf)
        except YAMLError as ex:
            raise ConfigurationError(ex) from ex
        except OSError as ex:
            raise ConfigurationError('could not read configuration %s: %s' % (
                mapstitch_conf, ex.strerror or ex)) from ex
        load_config(conf, conf_dict)
        _check_config(conf, mapstitch_conf)
    else:
        conf_base_dir = os.getcwd()

    load_env_overrides(conf, environ)
    _check_config(conf, 'environment')

    conf.cache.base_dir = abspath(conf.cache.base_dir, conf_base_dir)
    if conf.image.font_file:
        conf.image.font_file = abspath(conf.image.font_file, conf_base_dir)
    if conf.log_conf:
        conf.log_conf = abspath(conf.log_conf, conf_base_dir)
    conf.conf_base_dir = conf_base_dir

    return StaticMapConfiguration(conf)


class StaticMapConfiguration(object):
    """
    Creates all components for the configuration `conf`.
    """
    def __init__(self, conf):
        self.conf = conf

    @property
    def base_config(self):
        return self.conf

    def http_client(self):
        from mapstitch.client.http import HTTPClient
        tile_source = self.conf.tile_source
        return HTTPClient(timeout=tile_source.timeout, headers=tile_source.headers,
                          user_agent=tile_source.user_agent)

    def tile_source(self):
        from mapstitch.client.tile import TileClient, TileURLTemplate
        from mapstitch.source.tile import TiledSource
        url_template = TileURLTemplate(self.conf.tile_source.url)
        return TiledSource(TileClient(url_template, self.http_client()))

    def image_opts(self):
        from mapstitch.image.opts import ImageOptions
        return ImageOptions(transparent=True, format='png',
                            compress_level=self.conf.image.compress_level)

    def cache(self):
        from mapstitch.cache.file import StaticMapCache
        return StaticMapCache(self.conf.cache.base_dir, image_opts=self.image_opts())

    def overlay(self):
        from mapstitch.image.message import StaticMapOverlay
        image = self.conf.image
        return StaticMapOverlay(marker=image.marker, font_file=image.font_file,
                                font_size=image.font_size)

    def request_limits(self):
        from mapstitch.request.staticmap import RequestLimits
        request = self.conf.request
        return RequestLimits(max_width=request.max_width, max_height=request.max_height,
                             max_zoom=request.max_zoom)

    @property
    def default_label(self):
        return self.conf.image.label or ''

    @memoize
    def generator(self):
        """
        The `StaticMapGenerator` of this configuration. The generator
        holds the request queue, so there is only one per configuration.
        """
        from mapstitch.generator import StaticMapGenerator
        from mapstitch.image.tile import StaticMapStitcher
        stitcher = StaticMapStitcher(self.tile_source(), image_opts=self.image_opts())
        return StaticMapGenerator(stitcher, self.cache(), overlay=self.overlay(),
                                  queue_size=self.conf.queue.size, delay=self.conf.queue.delay)
