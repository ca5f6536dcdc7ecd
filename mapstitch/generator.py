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
Static map generation (synchronous and queued).

All queued requests are processed by a single background worker, one
after another and with a fixed delay in between. This is the only rate
limit towards the tile server.
"""
import queue
import threading

from mapstitch.cache import CacheWriteError
from mapstitch.source import TileFetchError
from mapstitch.util.lock import GenerationLocker

import logging
log = logging.getLogger('mapstitch.generator')


class QueueFullError(Exception):
    pass


class StaticMapGenerator(object):
    """
    Creates and caches static maps.

    :param stitcher: `StaticMapStitcher` for the tile layouts
    :param cache: `StaticMapCache` for the finished maps
    :param overlay: optional `StaticMapOverlay` for label and marker
    :param queue_size: maximum number of pending requests
    :param delay: seconds the worker waits after each request
    """
    def __init__(self, stitcher, cache, overlay=None, queue_size=100, delay=1.0,
                 locker=None):
        self.stitcher = stitcher
        self.cache = cache
        self.overlay = overlay
        self.delay = delay
        self.locker = locker or GenerationLocker()
        self.requests = queue.Queue(maxsize=queue_size)
        self._worker = None
        self._stats_lock = threading.Lock()
        self._counters = dict(queued=0, dropped=0, generated=0, failed=0)

    def stitch(self, req):
        """
        Return the location of the cached map for `req`, or an empty
        string if the map is not yet available.

        Missing maps are queued for the worker. Requests are dropped if
        the queue is full, this is counted but never raised.
        """
        location = self.cache.cached_location(req)
        if location:
            return location
        try:
            self._enqueue(req)
        except QueueFullError as ex:
            self._count('dropped')
            log.warning('dropped static map request: %s', ex)
        return ''

    def queue(self, req):
        """
        Queue `req` for the worker, unless the map is already cached.

        :raises QueueFullError: if the queue is at capacity
        """
        if self.cache.is_cached(req):
            return
        self._enqueue(req)

    def _enqueue(self, req):
        try:
            self.requests.put_nowait(req)
        except queue.Full:
            raise QueueFullError('unable to queue %r, %d requests pending'
                % (req, self.requests.maxsize)) from None
        self._count('queued')

    def generate_now(self, req):
        """
        Create the map for `req` and return its location. Returns the
        existing location if the map is already cached. Concurrent calls
        for the same request create the map only once.

        :raises TileFetchError: if a tile could not be retrieved
        :raises CacheWriteError: if the map could not be stored
        """
        with self.locker.lock(self.cache.location(req)):
            location = self.cache.cached_location(req)
            if location:
                log.debug('static map for %r already cached', req)
                return location
            try:
                img = self.stitcher.stitch(req.layout())
                if self.overlay is not None:
                    img = self.overlay.draw(img, req.label)
                location = self.cache.store(req, img)
            except Exception:
                self._count('failed')
                raise
        self._count('generated')
        return location

    def start_worker(self):
        """
        Start the background worker for queued requests. Does nothing
        if it is already running.
        """
        if self._worker is None or not self._worker.is_alive():
            self._worker = GenerationWorker(self)
            self._worker.start()
        return self._worker

    def stop_worker(self, timeout=None):
        if self._worker is not None:
            self._worker.stop(timeout)
            self._worker = None

    def _count(self, name):
        with self._stats_lock:
            self._counters[name] += 1

    def stats(self):
        """
        Return the request counters and the number of pending requests.
        """
        with self._stats_lock:
            stats = dict(self._counters)
        stats['pending'] = self.requests.qsize()
        return stats

    def __repr__(self):
        return '%s(%r, %r, queue_size=%d, delay=%r)' % (self.__class__.__name__,
            self.stitcher, self.cache, self.requests.maxsize, self.delay)


class GenerationWorker(threading.Thread):
    """
    Thread that creates all queued maps, one at a time (FIFO).
    Failed requests are logged and dropped.

    The worker checks for a stop request every `poll_interval`
    seconds while the queue is empty.
    """
    poll_interval = 0.5

    def __init__(self, generator):
        threading.Thread.__init__(self, name='mapstitch-generator')
        self.daemon = True
        self.generator = generator
        self._stop_event = threading.Event()

    def run(self):
        requests = self.generator.requests
        while not self._stop_event.is_set():
            try:
                req = requests.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            try:
                self.process(req)
            finally:
                requests.task_done()
            self._stop_event.wait(self.generator.delay)

    def process(self, req):
        try:
            location = self.generator.generate_now(req)
        except Exception as ex:
            log.error('could not create static map for %r: %s', req, ex,
                exc_info=not _is_expected_error(ex))
        else:
            log.info('static map created for %r: %s', req, location)

    def stop(self, timeout=None):
        """
        Stop the worker after the current request. Pending requests
        stay in the queue.
        """
        self._stop_event.set()
        self.join(timeout)


def _is_expected_error(ex):
    return isinstance(ex, (TileFetchError, CacheWriteError))
