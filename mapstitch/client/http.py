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
HTTP access to tile servers.
"""
import ssl
import time
from collections import namedtuple
from io import BytesIO
from urllib import request as urllib_request
from urllib.error import URLError, HTTPError

from mapstitch.version import version
from mapstitch.image import ImageSource
from mapstitch.client.log import log_request


class HTTPClientError(Exception):
    def __init__(self, arg, response_code=None):
        Exception.__init__(self, arg)
        self.response_code = response_code


HTTPResponse = namedtuple('HTTPResponse', ['code', 'headers', 'body'])


def default_user_agent():
    return 'MapStitch/%s' % (version, )


class HTTPClient(object):
    """
    Minimal blocking HTTP client with a fixed ``User-agent`` and an
    explicit timeout (in seconds, ``None`` for the socket default).
    """
    def __init__(self, timeout=None, headers=None, user_agent=None):
        self._timeout = timeout
        self.opener = urllib_request.build_opener(
            urllib_request.HTTPSHandler(context=ssl.create_default_context()))
        self.opener.addheaders = [('User-agent', user_agent or default_user_agent())]
        self.header_list = list(headers.items()) if headers else []

    def open(self, url):
        """
        GET `url` and return the complete `HTTPResponse`.

        :raises HTTPClientError: for connection errors, timeouts and
            all responses other than 2xx (or 204)
        """
        try:
            req = urllib_request.Request(url)
        except ValueError as e:
            raise self.handle_url_exception(url, 'URL not correct', e.args[0]) from e
        for key, value in self.header_list:
            req.add_header(key, value)

        code = None
        body = None
        start_time = time.time()
        try:
            if self._timeout is not None:
                result = self.opener.open(req, timeout=self._timeout)
            else:
                result = self.opener.open(req)
            with result:
                code = getattr(result, 'code', 200)
                headers = result.headers
                body = result.read()
        except HTTPError as e:
            code = e.code
            raise self.handle_url_exception(url, 'HTTP Error', str(code), response_code=code) from e
        except URLError as e:
            if isinstance(e.reason, ssl.SSLError):
                raise self.handle_url_exception(url, 'Could not verify connection to URL', e.reason) from e
            try:
                reason = e.reason.args[1]
            except (AttributeError, IndexError):
                reason = e.reason
            raise self.handle_url_exception(url, 'No response from URL', reason) from e
        except ValueError as e:
            raise self.handle_url_exception(url, 'URL not correct', e.args[0]) from e
        except Exception as e:
            raise self.handle_url_exception(url, 'Internal HTTP error', repr(e)) from e
        finally:
            log_request(url, code, size=len(body) if body is not None else None,
                        duration=time.time() - start_time, method=req.get_method())

        if code == 204:
            raise HTTPClientError('HTTP Error "204 No Content"', response_code=204)
        return HTTPResponse(code, headers, body)

    def open_image(self, url):
        """
        GET `url` and return the body as `ImageSource`. Responses with
        a content type other than ``image/*`` are errors.
        """
        resp = self.open(url)
        content_type = resp.headers.get('content-type')
        if content_type and not content_type.lower().startswith('image'):
            raise HTTPClientError('response is not an image: (%s)' % (content_type, ),
                                  response_code=resp.code)
        return ImageSource(BytesIO(resp.body))

    def handle_url_exception(self, url, message, reason, response_code=None):
        return HTTPClientError('%s "%s": %s' % (message, url, reason),
                               response_code=response_code)
