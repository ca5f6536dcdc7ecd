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
Static map service.
"""
from mapstitch.cache import CacheWriteError
from mapstitch.exception import RequestError
from mapstitch.request.staticmap import parse_staticmap_request
from mapstitch.response import Response
from mapstitch.service.base import Server
from mapstitch.source import TileFetchError

import logging
log = logging.getLogger(__name__)


class StaticMapServer(Server):
    """
    Returns cached static maps and queues missing maps for the
    background worker. Requests with the ``bypass`` parameter are
    created synchronously.

    :param generator: the `StaticMapGenerator`
    :param limits: the `RequestLimits` for all requests
    :param default_label: label for requests without ``label`` parameter
    """
    names = ('staticmap',)

    def __init__(self, generator, limits=None, default_label=''):
        Server.__init__(self)
        self.generator = generator
        self.limits = limits
        self.default_label = default_label

    def parse_request(self, req):
        return parse_staticmap_request(req.args, limits=self.limits,
                                       default_label=self.default_label)

    def render(self, parsed_req):
        map_request, bypass = parsed_req
        if bypass:
            location = self.generate(map_request)
        else:
            location = self.generator.stitch(map_request)

        if not location:
            resp = Response(b'', status=202)
            resp.no_cache_headers()
            return resp
        return self.image_response(location)

    def generate(self, map_request):
        # error details (tile URLs, cache paths) are logged, never returned
        try:
            return self.generator.generate_now(map_request)
        except TileFetchError as ex:
            log.warning('could not create static map for %r: %s', map_request, ex)
            raise RequestError('tile source error (see logs for details)',
                               request=map_request, internal=True, status=502) from ex
        except CacheWriteError as ex:
            log.error('could not store static map for %r: %s', map_request, ex)
            raise RequestError('could not store static map (see logs for details)',
                               request=map_request, internal=True) from ex

    def image_response(self, location):
        with open(location, 'rb') as f:
            data = f.read()
        return Response(data, content_type='image/png')
