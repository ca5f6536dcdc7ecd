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

import pytest

from mapstitch.util.yaml import load_yaml, load_yaml_file, YAMLError


class TestLoadYAMLFile(object):

    def yaml_file(self, tmpdir, content):
        f = tmpdir.join('test.yaml')
        f.write(content)
        return f.strpath

    def test_load_yaml_file(self, tmpdir):
        f = self.yaml_file(tmpdir, "hello:\n - 1\n - 2")
        with open(f) as fobj:
            doc = load_yaml_file(fobj)
        assert doc == {"hello": [1, 2]}

    def test_load_yaml_file_filename(self, tmpdir):
        f = self.yaml_file(tmpdir, "hello:\n - 1\n - 2")
        assert isinstance(f, str)
        doc = load_yaml_file(f)
        assert doc == {"hello": [1, 2]}

    def test_load_yaml(self):
        doc = load_yaml("hello:\n - 1\n - 2")
        assert doc == {"hello": [1, 2]}

    def test_load_empty(self):
        assert load_yaml("") == {}
        assert load_yaml("# only a comment\n") == {}

    def test_load_yaml_with_tabs(self, tmpdir):
        f = self.yaml_file(tmpdir, "hello:\n\t- world")
        with pytest.raises(YAMLError) as excinfo:
            load_yaml_file(f)
        assert "line 2" in str(excinfo.value)

    def test_load_yaml_string_error(self):
        try:
            load_yaml('only a string')
        except YAMLError as ex:
            assert "not a YAML dict" in str(ex)
        else:
            assert False, "expected YAMLError"

    def test_no_python_objects(self):
        with pytest.raises(YAMLError):
            load_yaml("foo: !!python/object/apply:os.system ['true']")
