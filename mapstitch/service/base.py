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
Service handler.
"""
from mapstitch.exception import RequestError

class Server(object):
    names = tuple()
    request_parser = lambda x: None

    def handle(self, req):
        try:
            parsed_req = self.parse_request(req)
            return self.render(parsed_req)
        except RequestError as e:
            return e.render()

    def parse_request(self, req):
        return self.request_parser(req)

    def render(self, parsed_req):
        raise NotImplementedError()
