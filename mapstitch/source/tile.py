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
Retrieve tiles from XYZ tile servers.
"""

from mapstitch.client.http import HTTPClientError
from mapstitch.grid import TILE_SIZE
from mapstitch.source import TileNotFoundError, TileTransportError, TileDecodeError

import logging
log = logging.getLogger('mapstitch.source.tile')


class TiledSource(object):
    """
    Source for single 256x256 tiles.

    ``get_tile(x, y, zoom)`` returns the decoded tile as PIL `Image` or
    raises a `TileFetchError`.
    """
    def __init__(self, client):
        self.client = client

    def get_tile(self, x, y, zoom):
        tile_coord = (x, y, zoom)
        try:
            source = self.client.get_tile(tile_coord)
        except HTTPClientError as e:
            log.warning('could not retrieve tile %s: %s', tile_coord, e)
            if e.response_code == 404:
                raise TileNotFoundError(e.args[0], tile_coord=tile_coord) from e
            raise TileTransportError(e.args[0], tile_coord=tile_coord) from e

        try:
            img = source.as_image()
        except (OSError, ValueError, SyntaxError) as e:
            log.warning('could not decode tile %s: %s', tile_coord, e)
            raise TileDecodeError('could not decode tile %d/%d/%d: %s'
                % (zoom, x, y, e), tile_coord=tile_coord) from e

        if img.size != (TILE_SIZE, TILE_SIZE):
            raise TileDecodeError('unexpected tile size for %d/%d/%d: %r'
                % (zoom, x, y, img.size), tile_coord=tile_coord)
        return img

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.client)
