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

import logging
logger = logging.getLogger('mapstitch.source.request')

def log_request(url, status, size=None, method='GET', duration=None):
    """
    Log one upstream request as ``METHOD URL STATUS SIZE_KB DURATION_MS``.
    Unknown values are logged as ``-``.
    """
    if not logger.isEnabledFor(logging.INFO):
        return
    if size is not None:
        size = '%.1f' % (size / 1024.0, )
    else:
        size = '-'
    duration = '%d' % (duration * 1000) if duration else '-'
    logger.info('%s %s %s %s %s', method, url.replace(' ', ''), status or '-', size, duration)
