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

import os

from mapstitch.cache import CacheWriteError
from mapstitch.cache import path
from mapstitch.image import ImageSource
from mapstitch.util.fs import ensure_directory, write_atomic

import logging
log = logging.getLogger('mapstitch.cache.file')


class StaticMapCache(object):
    """
    This class is responsible to store and load rendered static maps.

    Each map is stored once, as PNG file below `cache_dir`. There is no
    index: a map is cached when its file exists.
    """
    file_ext = 'png'

    def __init__(self, cache_dir, image_opts=None):
        """
        :param cache_dir: the path where the maps will be stored
        """
        self.cache_dir = cache_dir
        self.image_opts = image_opts

    def location(self, req):
        return path.location(path.fingerprint(req), self.cache_dir, self.file_ext)

    def is_cached(self, req):
        """
        Returns ``True`` if a map for `req` is stored.
        """
        return os.path.isfile(self.location(req))

    def cached_location(self, req):
        """
        Return the location of the stored map for `req` or ``None``.
        """
        location = self.location(req)
        if os.path.isfile(location):
            return location
        return None

    def load(self, req):
        """
        Return the stored map for `req` as `ImageSource` or ``None``.
        """
        location = self.location(req)
        if os.path.isfile(location):
            return ImageSource(location, image_opts=self.image_opts)
        return None

    def store(self, req, img):
        """
        Encode `img` and store it for `req`. The file is written
        atomically, readers see either no file or the complete map.

        :returns: the location of the stored map
        :raises CacheWriteError: if the map could not be encoded or written
        """
        location = self.location(req)
        try:
            data = img.as_buffer(self.image_opts).read()
        except Exception as ex:
            raise CacheWriteError('could not encode static map for %s: %s' % (location, ex)) from ex
        try:
            ensure_directory(location)
            write_atomic(location, data)
        except OSError as ex:
            raise CacheWriteError('could not write static map to %s: %s' % (location, ex)) from ex
        log.debug('stored static map %s', location)
        return location

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.cache_dir)
