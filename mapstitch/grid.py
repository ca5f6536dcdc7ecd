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
Web Mercator projection and tile layout of static maps.

All pixel coordinates refer to the 256x256 world of zoom level 0,
scaled by ``2**zoom`` for higher levels (the tiling scheme of
OpenStreetMap and most other web tile servers).
"""
import math

TILE_SIZE = 256

# latitude where the Web Mercator world becomes square
LAT_LIMIT = math.atan(math.sinh(math.pi)) / (2 * math.pi) * 360


def project(lat, lon):
    """
    Project `lat`/`lon` (in degrees) to pixel coordinates at zoom level 0.
    Values outside of +-`LAT_LIMIT` are not rejected, they are
    just outside of the tile grid.

    >>> project(0, 0)[0]
    128.0
    >>> project(0, -180)[0]
    0.0
    """
    x = ((lon + 180) / 360) * TILE_SIZE
    lat_rad = lat * math.pi / 180
    y = (TILE_SIZE / (2 * math.pi)) * (math.pi - math.log(math.tan(math.pi / 4 + lat_rad / 2)))
    return x, y


def to_tile_pixel(m, zoom):
    """
    Split the zoom level 0 coordinate `m` into the tile index and the
    pixel within that tile at `zoom`.

    >>> to_tile_pixel(65.67111111111112, 0)
    (0, 65)
    >>> to_tile_pixel(95.17492654697409, 1)
    (0, 190)
    >>> to_tile_pixel(-1, 0)
    (-1, 255)
    """
    absolute = math.floor(m * (1 << zoom))
    return absolute // TILE_SIZE, absolute % TILE_SIZE


def locate(lat, lon, zoom):
    """
    Return the tile and the pixel within the tile for `lat`/`lon` at `zoom`.

    :rtype: ``(tile_x, tile_y, (pixel_x, pixel_y))``
    """
    x, y = project(lat, lon)
    tile_x, pixel_x = to_tile_pixel(x, zoom)
    tile_y, pixel_y = to_tile_pixel(y, zoom)
    return tile_x, tile_y, (pixel_x, pixel_y)


class TileLayout(object):
    """
    Placement of all tiles for a static map of `size` that is
    centered on `lat`/`lon`.

    The tile that contains the center coordinate is placed so that
    the coordinate ends up at pixel ``(width // 2, height // 2)``.
    All other tiles are aligned to that tile.
    """
    def __init__(self, size, zoom, lat, lon):
        self.size = size
        self.zoom = zoom
        tile_x, tile_y, pixel = locate(lat, lon, zoom)
        self.center_tile = tile_x, tile_y
        self.center_pixel = pixel
        self.center = size[0] // 2, size[1] // 2
        # upper-left of the first tile, always in [-TILE_SIZE, -1]
        self.offset = tuple(
            -(TILE_SIZE - (c - p) % TILE_SIZE)
            for c, p in zip(self.center, self.center_pixel)
        )
        self.grid = tuple(
            -(-(s - o) // TILE_SIZE)
            for s, o in zip(self.size, self.offset)
        )
        self.start = tuple(
            t - (c - o) // TILE_SIZE
            for t, c, o in zip(self.center_tile, self.center, self.offset)
        )

    def tile_offset(self, dx, dy):
        """
        Return the canvas position (upper-left) of the tile in column
        `dx` and row `dy` of the layout.
        """
        return (TILE_SIZE * dx + self.offset[0], TILE_SIZE * dy + self.offset[1])

    def _intersects(self, pos):
        for p, s in zip(pos, self.size):
            if max(p, 0) >= min(p + TILE_SIZE, s):
                return False
        return True

    def tiles(self):
        """
        Yield ``((x, y, zoom), (left, top))`` for all tiles that intersect
        the canvas, row by row (top to bottom).
        """
        for dy in range(self.grid[1]):
            for dx in range(self.grid[0]):
                pos = self.tile_offset(dx, dy)
                if not self._intersects(pos):
                    continue
                yield (self.start[0] + dx, self.start[1] + dy, self.zoom), pos

    def __len__(self):
        return sum(1 for _ in self.tiles())

    def __repr__(self):
        return '%s(size=%r, zoom=%r, center_tile=%r, offset=%r, grid=%r)' % (
            self.__class__.__name__, self.size, self.zoom, self.center_tile,
            self.offset, self.grid)
