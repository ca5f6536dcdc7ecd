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
File system related utility functions.
"""
import os
import errno
import random


def ensure_directory(file_name):
    """
    Create the parent directory of `file_name` if it does not exist,
    else do nothing.
    """
    dir_name = os.path.dirname(file_name)
    if dir_name and not os.path.exists(dir_name):
        try:
            os.makedirs(dir_name)
        except OSError as e:
            if e.errno != errno.EEXIST:
                raise e

def write_atomic(filename, data):
    """
    write_atomic writes `data` to a random file in filename's directory
    first and renames that file to the target filename afterwards.
    Readers never see a partially written `filename`.
    """
    path_tmp = filename + '.tmp-' + str(random.randint(0, 99999999))
    try:
        fd = os.open(path_tmp, os.O_EXCL | os.O_CREAT | os.O_WRONLY, 0o666)
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.rename(path_tmp, filename)
    except OSError as ex:
        try:
            os.unlink(path_tmp)
        except OSError:
            pass
        raise ex
