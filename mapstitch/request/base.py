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
Service requests (parsing, handling, etc).
"""
from urllib.parse import parse_qsl


class NoCaseMultiDict(dict):
    """
    This is a dictionary that allows case insensitive access to values.

    >>> d = NoCaseMultiDict([('A', 'b'), ('a', 'c'), ('B', 'f'), ('c', 'x'), ('c', 'y'), ('c', 'z')])
    >>> d['a']
    'b'
    >>> d.get_all('a')
    ['b', 'c']
    >>> 'a' in d and 'b' in d
    True
    """
    def __init__(self, mapping=()):
        """A `NoCaseMultiDict` can be constructed from an iterable of
        ``(key, value)`` tuples or a dict.
        """
        dict.__init__(self)
        if isinstance(mapping, NoCaseMultiDict):
            itr = ((key, value) for key, values in mapping.iteritems() for value in values)
        elif isinstance(mapping, dict):
            itr = mapping.items()
        else:
            itr = iter(mapping)
        for key, value in itr:
            dict.setdefault(self, key.lower(), (key, []))[1].append(value)

    def __getitem__(self, key):
        """
        Return the first data value for this key.

        :raise KeyError: if the key does not exist
        """
        if key in self:
            return dict.__getitem__(self, key.lower())[1][0]
        raise KeyError(key)

    def __contains__(self, key):
        return dict.__contains__(self, key.lower())

    def get(self, key, default=None):
        """
        Return the first value for this key or `default` if the key
        doesn't exist.

        >>> d = NoCaseMultiDict(dict(Label='OSM'))
        >>> d.get('LABEL')
        'OSM'
        >>> d.get('zoom', '0')
        '0'
        """
        if key in self:
            return self[key]
        return default

    def get_all(self, key):
        """
        Return all values for the key as a list. Returns an empty list, if
        the key doesn't exist.
        """
        if key in self:
            return dict.__getitem__(self, key.lower())[1]
        return []

    def iteritems(self):
        """
        Iterates over all keys and values.
        """
        for _, (key, values) in dict.items(self):
            yield key, values

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, list(self.iteritems()))


def url_decode(qs, charset='utf-8', errors='replace'):
    """
    Parse query string `qs` and return a `NoCaseMultiDict`.
    Parameters without value (``?bypass``) are kept with an empty value.
    """
    return NoCaseMultiDict(parse_qsl(qs, keep_blank_values=True,
                                     encoding=charset, errors=errors))


class Request(object):
    charset = 'utf-8'

    def __init__(self, environ):
        self.environ = environ
        self.environ['mapstitch.request'] = self
        self._args = None

    @property
    def args(self):
        if self._args is None:
            self._args = url_decode(self.environ.get('QUERY_STRING', ''), self.charset)
        return self._args

    @property
    def method(self):
        return self.environ.get('REQUEST_METHOD', 'GET').upper()

    @property
    def path(self):
        path = self.environ.get('PATH_INFO', '')
        if path and isinstance(path, bytes):
            path = path.decode('utf-8')
        return path
