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

# built-in defaults, overwritten by mapstitch.yaml and
# MAPSTITCH_* environment variables

tile_source = dict(
    url = 'https://tile.openstreetmap.org/{z}/{x}/{y}.png',
    # User-agent header, MapStitch/<version> if None
    user_agent = None,
    # seconds
    timeout = 10,
    headers = {},
)

cache = dict(
    base_dir = './cache_data',
)

queue = dict(
    size = 100,
    # seconds between two generated maps
    delay = 1.0,
)

request = dict(
    max_width = 2000,
    max_height = 2000,
    max_zoom = 23,
)

image = dict(
    label = '\N{COPYRIGHT SIGN} OpenStreetMap contributors',
    marker = True,
    font_file = None,
    font_size = 12,
    # zlib level for PNG encoding, 1 is fastest
    compress_level = 1,
)

log_conf = None
debug_mode = False
