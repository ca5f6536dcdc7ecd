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
import struct
import hashlib


def fingerprint(req):
    """
    Return the hex SHA-1 of all parameters of the static map request `req`.

    The integers are packed as little-endian signed 64 bit, the coordinates
    as little-endian doubles, followed by the UTF-8 encoded label.
    """
    sha1 = hashlib.sha1()
    sha1.update(struct.pack('<qqqdd', req.width, req.height, req.zoom,
                            req.latitude, req.longitude))
    sha1.update(req.label.encode('utf-8'))
    return sha1.hexdigest()


def location(fp, cache_dir, file_ext='png'):
    """
    Return the path of the static map with the fingerprint `fp`.
    The first two characters of the fingerprint are used as directory.

    >>> location('a94a8fe5ccb19ba61c4c0873d391e987982fbbd3', '/tmp/cache').replace('\\\\', '/')
    '/tmp/cache/a9/4a8fe5ccb19ba61c4c0873d391e987982fbbd3.png'
    """
    return os.path.join(cache_dir, fp[:2], fp[2:] + '.' + file_ext)
