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

from PIL import Image, ImageColor


class ImageOptions(object):
    def __init__(self, mode=None, transparent=None, format=None, bgcolor=None,
        compress_level=None):
        self.mode = mode
        self.transparent = transparent
        if format is not None:
            format = ImageFormat(format)
        self.format = format
        self.bgcolor = bgcolor
        self.compress_level = compress_level

    def __repr__(self):
        options = []
        for k in ('mode', 'transparent', 'format', 'bgcolor', 'compress_level'):
            v = getattr(self, k)
            if v is not None:
                options.append('%s=%r' % (k, v))
        return 'ImageOptions(%s)' % (', '.join(options), )

class ImageFormat(str):
    """
    Image format as extension or mime type.

    >>> ImageFormat('image/png').ext
    'png'
    """
    def __new__(cls, value, *args, **keywargs):
        if isinstance(value, ImageFormat):
            return value
        return str.__new__(cls, value)

    @property
    def ext(self):
        ext = str(self)
        if '/' in ext:
            ext = ext.split('/', 1)[1]
        if ';' in ext:
            ext = ext.split(';', 1)[0]
        return ext.strip()

def create_image(size, image_opts=None):
    """
    Create a new image that is compatible with the given `image_opts`.
    Takes into account mode, transparent, bgcolor.
    """
    if image_opts is None:
        mode = 'RGB'
        bgcolor = (255, 255, 255)
    else:
        mode = image_opts.mode
        if mode is None:
            mode = 'RGBA' if image_opts.transparent else 'RGB'

        bgcolor = image_opts.bgcolor or (255, 255, 255)
        if isinstance(bgcolor, str):
            bgcolor = ImageColor.getrgb(bgcolor)
        if mode == 'RGBA' and len(bgcolor) == 3:
            bgcolor = bgcolor + ((0, ) if image_opts.transparent else (255, ))

    return Image.new(mode, size, bgcolor)
