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
Tile sources for static maps.
"""

class TileFetchError(Exception):
    """
    Tile could not be retrieved from the tile source.

    :ivar tile_coord: the ``(x, y, z)`` of the tile, if known
    """
    def __init__(self, message, tile_coord=None):
        Exception.__init__(self, message)
        self.tile_coord = tile_coord

class TileNotFoundError(TileFetchError):
    pass

class TileTransportError(TileFetchError):
    pass

class TileDecodeError(TileFetchError):
    pass
