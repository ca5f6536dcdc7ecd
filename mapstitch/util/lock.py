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
In-process locking for static map generation.
"""
import threading

__all__ = ['GenerationLocker', 'KeyLock']


class GenerationLocker(object):
    """
    Hands out one lock per key (e.g. a request fingerprint).

    At most one thread holds the lock for a given key. Locks are removed
    as soon as no thread holds or waits for them, so the number of
    entries is bounded by the number of concurrent generations.
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._locks = {}

    def lock(self, key):
        return KeyLock(self, key)

    def _acquire(self, key):
        with self._lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        entry[0].acquire()

    def _release(self, key):
        with self._lock:
            entry = self._locks[key]
            entry[0].release()
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def __len__(self):
        with self._lock:
            return len(self._locks)


class KeyLock(object):
    def __init__(self, locker, key):
        self.locker = locker
        self.key = key
        self._locked = False

    def __enter__(self):
        self.lock()

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.unlock()

    def lock(self):
        if not self._locked:
            self.locker._acquire(self.key)
            self._locked = True

    def unlock(self):
        if self._locked:
            self._locked = False
            self.locker._release(self.key)

