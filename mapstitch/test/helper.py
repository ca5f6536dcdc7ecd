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

import re
import threading

from PIL import Image

from mapstitch.grid import TILE_SIZE
from mapstitch.source import TileNotFoundError


def assert_re(value, regex):
    """
    >>> assert_re('hello', 'l+')
    >>> assert_re('hello', 'l{3}')
    Traceback (most recent call last):
        ...
    AssertionError: hello ~= l{3}
    """
    match = re.search(regex, value)
    assert match is not None, '%s ~= %s' % (value, regex)


def tile_color(tile_coord):
    """
    Blue value of the mock tile for `tile_coord`.
    """
    x, y, z = tile_coord
    return (x * 7 + y * 13 + z * 31) % 256


def gradient_tile(blue):
    """
    Create a tile where each pixel encodes its position:
    ``(px, py, blue, 255)``.
    """
    py = Image.linear_gradient('L')
    px = py.transpose(Image.Transpose.TRANSPOSE)
    b = Image.new('L', (TILE_SIZE, TILE_SIZE), blue)
    a = Image.new('L', (TILE_SIZE, TILE_SIZE), 255)
    return Image.merge('RGBA', (px, py, b, a))


class MockTileSource(object):
    """
    Tile source that records all requested tiles and returns
    `gradient_tile` images. Tiles in `missing` raise `TileNotFoundError`.
    """
    def __init__(self, missing=(), delay=None):
        self.requested = []
        self.missing = set(missing)
        self.delay = delay
        self._lock = threading.Lock()

    def get_tile(self, x, y, zoom):
        tile_coord = x, y, zoom
        with self._lock:
            self.requested.append(tile_coord)
        if self.delay:
            threading.Event().wait(self.delay)
        if tile_coord in self.missing:
            raise TileNotFoundError('no tile', tile_coord=tile_coord)
        return gradient_tile(tile_color(tile_coord))
