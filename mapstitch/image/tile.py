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

from mapstitch.image import ImageSource
from mapstitch.image.opts import create_image, ImageOptions

import logging
log = logging.getLogger(__name__)

class StaticMapStitcher(object):
    """
    Assemble a static map from the tiles of a `TileLayout`.
    """
    def __init__(self, tile_source, image_opts=None):
        """
        :param tile_source: source with ``get_tile(x, y, zoom)``
        """
        self.tile_source = tile_source
        self.image_opts = image_opts or ImageOptions(transparent=True, format='png')

    def stitch(self, layout):
        """
        Fetch and paste all tiles of `layout`. The first tile that can not
        be fetched aborts the stitching, there is no partial result.

        :raises TileFetchError: if any tile fails
        :rtype: `ImageSource`
        """
        result = create_image(layout.size, self.image_opts)

        for tile_coord, pos in layout.tiles():
            tile = self.tile_source.get_tile(*tile_coord)
            if tile.mode != result.mode:
                tile = tile.convert(result.mode)
            # no mask: tiles replace the canvas content
            result.paste(tile, pos)

        log.debug('stitched %s', layout)
        return ImageSource(result, size=layout.size, image_opts=self.image_opts)
