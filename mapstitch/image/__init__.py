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
Image handling (loading, encoding, etc).
"""
import io
from io import BytesIO

from PIL import Image

from mapstitch.image.opts import ImageOptions

import logging
log = logging.getLogger('mapstitch.image')


class ImageSource(object):
    """
    This class wraps either a PIL image, a file-like object, or a file name.
    You can access the result as an image (`as_image` ) or a file-like buffer
    object (`as_buffer`).
    """

    def __init__(self, source, size=None, image_opts=None):
        """
        :param source: the image
        :type source: PIL `Image`, image file object, or filename
        :param size: the size of the ``source`` in pixel
        """
        self._img = None
        self._buf = None
        self._fname = None
        self.source = source
        self.image_opts = image_opts
        self._size = size

    @property
    def source(self):
        return self._img or self._buf or self._fname

    @source.setter
    def source(self, source):
        self._img = None
        self._buf = None
        self._fname = None
        if isinstance(source, str):
            self._fname = source
        elif isinstance(source, Image.Image):
            self._img = source
        else:
            self._buf = source

    def close_buffers(self):
        if self._buf:
            try:
                self._buf.close()
            except IOError:
                pass

    @property
    def filename(self):
        return self._fname

    def as_image(self):
        """
        Returns the image or the loaded image. The image data is fully
        decoded, so broken images fail here and not on first use.

        :rtype: PIL `Image`
        """
        if not self._img:
            self._make_seekable_buf()
            log.debug('file(%s) -> image', self._fname or self._buf)

            try:
                img = Image.open(self._buf)
                img.load()
            except Exception:
                self.close_buffers()
                raise
            self._img = img
        return self._img

    def _make_seekable_buf(self):
        if not self._buf and self._fname:
            self._buf = open(self._fname, 'rb')
        else:
            try:
                self._buf.seek(0)
            except (io.UnsupportedOperation, AttributeError):
                # PIL needs file objects with seek
                self._buf = BytesIO(self._buf.read())

    def as_buffer(self, image_opts=None):
        """
        Returns the image as a file object. Images are encoded with
        `image_opts` (or the options of this source), existing
        files and buffers are returned as they are.

        :rtype: file-like object
        """
        if not self._buf and not self._fname:
            if image_opts is None:
                image_opts = self.image_opts
            log.debug('image -> buf(%s)', image_opts.format)
            self._buf = img_to_buf(self._img, image_opts=image_opts)
        else:
            self._make_seekable_buf()
        return self._buf

    @property
    def size(self):
        if self._size is None:
            self._size = self.as_image().size
        return self._size


def img_to_buf(img, image_opts):
    """
    Encode `img` with the format of `image_opts` (PNG if unset).
    """
    if image_opts is None:
        image_opts = ImageOptions(format='png')
    format = image_opts.format.ext if image_opts.format else 'png'
    options = {}
    if format == 'png' and image_opts.compress_level is not None:
        options['compress_level'] = image_opts.compress_level

    buf = BytesIO()
    img.save(buf, format, **options)
    buf.seek(0)
    return buf
