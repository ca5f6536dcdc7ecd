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
Service exception handling.
"""
from mapstitch.response import Response

class RequestError(Exception):
    """
    Exception for all request related errors.

    :ivar internal: True if the error was an internal error, ie. the request itself
                    was valid (e.g. the tile server is unreachable)
    """
    def __init__(self, message, request=None, internal=False, status=None):
        Exception.__init__(self, message)
        self.msg = message
        self.request = request
        self.internal = internal
        self.status = status

    def render(self):
        """
        Return a plain text response with the error message.

        :rtype: `Response`
        """
        if self.status is not None:
            return Response(self.msg, status=self.status, mimetype='text/plain')
        return Response('internal error: %s' % self.msg, status=500, mimetype='text/plain')

    def __str__(self):
        return self.msg
