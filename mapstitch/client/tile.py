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


class TileClient(object):
    def __init__(self, url_template, http_client):
        self.url_template = url_template
        self.http_client = http_client

    def get_tile(self, tile_coord):
        url = self.url_template.substitute(tile_coord)
        return self.http_client.open_image(url)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.url_template)


_placeholders = [
    (re.compile(r'\$?\{[zZ]\}'), '%(z)d'),
    (re.compile(r'\$?\{[xX]\}'), '%(x)d'),
    (re.compile(r'\$?\{[yY]\}'), '%(y)d'),
]

class TileURLTemplate(object):
    """
    URL template for XYZ tile servers. The ``{z}``, ``{x}`` and ``{y}``
    placeholders are case-insensitive and accept an optional ``$``
    (``${z}``).

    >>> t = TileURLTemplate('http://foo/tiles/${z}/{X}/{y}.png')
    >>> t.template
    'http://foo/tiles/%(z)d/%(x)d/%(y)d.png'
    >>> t.substitute((7, 4, 3))
    'http://foo/tiles/3/7/4.png'

    >>> t = TileURLTemplate('http://foo/{z}/{x}/{y}.png?key=100%')
    >>> t.substitute((1, 2, 3))
    'http://foo/3/1/2.png?key=100%'
    """
    def __init__(self, url):
        self.url = url
        template = url.replace('%', '%%')
        for placeholder_re, replacement in _placeholders:
            template = placeholder_re.sub(replacement, template)
        self.template = template

    def substitute(self, tile_coord):
        x, y, z = tile_coord
        return self.format(z, x, y)

    def format(self, zoom, x, y):
        """
        >>> TileURLTemplate('/{y}/{x}/{z}').format(3, 1, 2)
        '/2/1/3'
        """
        return self.template % dict(x=x, y=y, z=zoom)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.url)
