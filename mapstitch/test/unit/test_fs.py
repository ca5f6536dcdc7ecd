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

import pytest

from mapstitch.util.fs import ensure_directory, write_atomic


class TestEnsureDirectory(object):
    def test_ensure_directory(self, tmpdir):
        ensure_directory(tmpdir.join('a', 'b', 'c.png').strpath)
        assert tmpdir.join('a', 'b').check(dir=True)
        assert not tmpdir.join('a', 'b', 'c.png').check()

    def test_existing_directory(self, tmpdir):
        tmpdir.mkdir('a')
        ensure_directory(tmpdir.join('a', 'b.png').strpath)
        assert os.listdir(tmpdir.join('a').strpath) == []

    def test_relative(self, tmpdir):
        with tmpdir.as_cwd():
            ensure_directory('./a/b/c')
        assert tmpdir.join('a', 'b').check(dir=True)


class TestWriteAtomic(object):
    def test_write(self, tmpdir):
        filename = tmpdir.join('map.png').strpath
        write_atomic(filename, b'12345')
        with open(filename, 'rb') as f:
            assert f.read() == b'12345'
        assert os.listdir(tmpdir.strpath) == ['map.png']

    def test_replace(self, tmpdir):
        filename = tmpdir.join('map.png').strpath
        write_atomic(filename, b'12345')
        write_atomic(filename, b'abc')
        with open(filename, 'rb') as f:
            assert f.read() == b'abc'

    def test_missing_directory(self, tmpdir):
        filename = tmpdir.join('missing', 'map.png').strpath
        with pytest.raises(OSError):
            write_atomic(filename, b'12345')
        assert os.listdir(tmpdir.strpath) == []

    def test_target_is_directory(self, tmpdir):
        tmpdir.mkdir('map.png')
        with pytest.raises(OSError):
            write_atomic(tmpdir.join('map.png').strpath, b'12345')
        # tmp file removed
        assert os.listdir(tmpdir.strpath) == ['map.png']

    @pytest.mark.skipif(os.name == 'nt', reason='no POSIX file modes')
    def test_not_executable(self, tmpdir):
        filename = tmpdir.join('map.png').strpath
        old_umask = os.umask(0o022)
        try:
            write_atomic(filename, b'12345')
        finally:
            os.umask(old_umask)
        mode = os.stat(filename).st_mode & 0o777
        assert mode == 0o644
