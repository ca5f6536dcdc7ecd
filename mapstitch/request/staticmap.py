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
Static map requests.
"""
import math
from collections import namedtuple

from mapstitch.exception import RequestError
from mapstitch.grid import LAT_LIMIT, TileLayout
from mapstitch.request.base import NoCaseMultiDict


class ValidationError(RequestError):
    """
    Invalid or out-of-range request parameter.
    """
    def __init__(self, message, param=None):
        if param:
            message = '%s: %s' % (param, message)
        RequestError.__init__(self, message, status=400)
        self.param = param


class StaticMapRequest(namedtuple('StaticMapRequest',
        ['width', 'height', 'zoom', 'latitude', 'longitude', 'label'])):
    """
    Immutable static map request. Requests with the same values are
    equal and share the same cached image.
    """
    __slots__ = ()

    def __new__(cls, width, height, zoom, latitude, longitude, label=''):
        return super(StaticMapRequest, cls).__new__(cls, int(width), int(height),
            int(zoom), float(latitude), float(longitude), label or '')

    @property
    def size(self):
        return self.width, self.height

    def layout(self):
        return TileLayout(self.size, self.zoom, self.latitude, self.longitude)


class RequestLimits(object):
    """
    Accepted ranges for static map parameters.
    """
    def __init__(self, max_width=2000, max_height=2000, max_zoom=23):
        self.max_width = max_width
        self.max_height = max_height
        self.max_zoom = max_zoom


def parse_int(value, min=None, max=None):
    """
    >>> parse_int('12', 0, 100)
    12
    >>> parse_int('abc')
    Traceback (most recent call last):
    ...
    mapstitch.request.staticmap.ValidationError: abc is not an int
    """
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ValidationError('%s is not an int' % (value, ))
    if min is not None and result < min:
        raise ValidationError('%d is lower than %d' % (result, min))
    if max is not None and result > max:
        raise ValidationError('%d is higher than %d' % (result, max))
    return result


def parse_float(value, min=None, max=None):
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValidationError('%s is not a float' % (value, ))
    if not math.isfinite(result):
        raise ValidationError('%s is not a float' % (value, ))
    if min is not None and result < min:
        raise ValidationError('%s is lower than %f' % (value, min))
    if max is not None and result > max:
        raise ValidationError('%s is higher than %f' % (value, max))
    return result


def _param(params, names, parse, default, **kw):
    for name in names:
        if name in params:
            try:
                return parse(params[name], **kw)
            except ValidationError as ex:
                raise ValidationError(ex.msg, param=name) from None
    return default


def parse_staticmap_request(params, limits=None, default_label=''):
    """
    Create a `StaticMapRequest` from the (query) parameters `params`.
    Missing parameters get their default values, ``lon`` is accepted as
    alias for ``long``.

    :returns: the request and whether the ``bypass`` flag was set
    :raises ValidationError: for invalid or out-of-range values
    """
    if not isinstance(params, NoCaseMultiDict):
        params = NoCaseMultiDict(params)
    if limits is None:
        limits = RequestLimits()

    width = _param(params, ['width'], parse_int, 300, min=0, max=limits.max_width)
    height = _param(params, ['height'], parse_int, 300, min=0, max=limits.max_height)
    zoom = _param(params, ['zoom'], parse_int, 0, min=0, max=limits.max_zoom)
    lat = _param(params, ['lat'], parse_float, 0.0, min=-LAT_LIMIT, max=LAT_LIMIT)
    lon = _param(params, ['long', 'lon'], parse_float, 0.0, min=-180.0, max=180.0)
    label = params.get('label', default_label)
    bypass = 'bypass' in params

    return StaticMapRequest(width, height, zoom, lat, lon, label), bypass
