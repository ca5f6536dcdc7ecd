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
The WSGI application.
"""
import os
import re
import sys
import logging.config

from mapstitch.request import Request
from mapstitch.response import Response
from mapstitch.config.loader import load_configuration, ConfigurationError
from mapstitch.service.staticmap import StaticMapServer

import logging
log = logging.getLogger('mapstitch.config')
log_wsgiapp = logging.getLogger('mapstitch.wsgiapp')


def init_logging_system(log_conf, base_dir):
    if log_conf:
        if not os.path.exists(log_conf):
            print('ERROR: log configuration %s not found.' % log_conf, file=sys.stderr)
            return
        logging.config.fileConfig(log_conf, dict(here=base_dir))


def make_wsgi_app(mapstitch_conf=None, debug=False, start_worker=True, environ=None):
    """
    Create a MapStitchApp with the given configuration.

    :param mapstitch_conf: the file name of the mapstitch.yaml configuration
    :param start_worker: start the background worker for queued maps
    :param environ: environment for the ``MAPSTITCH_*`` overrides
    """
    try:
        conf = load_configuration(mapstitch_conf=mapstitch_conf, environ=environ)
    except ConfigurationError as e:
        log.fatal(e)
        raise

    base_config = conf.base_config
    init_logging_system(base_config.log_conf, base_config.conf_base_dir)

    generator = conf.generator()
    if start_worker:
        generator.start_worker()
    services = [
        StaticMapServer(generator, limits=conf.request_limits(),
                        default_label=conf.default_label),
    ]

    app = MapStitchApp(services, base_config)
    app.generator = generator
    if debug:
        base_config.debug_mode = True
        from werkzeug.debug import DebuggedApplication
        app = DebuggedApplication(app, evalex=True)
    return app


class MapStitchApp(object):
    """
    The MapStitch WSGI application.
    """
    handler_path_re = re.compile(r'^/(\w+)')

    def __init__(self, services, base_config):
        self.handlers = {}
        self.base_config = base_config
        self.generator = None
        for service in services:
            for name in service.names:
                self.handlers[name] = service

    def __call__(self, environ, start_response):
        resp = None
        req = Request(environ)

        match = self.handler_path_re.match(req.path)
        if match:
            handler_name = match.group(1)
            if handler_name in self.handlers:
                try:
                    resp = self.handlers[handler_name].handle(req)
                except Exception:
                    if self.base_config.debug_mode:
                        raise
                    log_wsgiapp.fatal('fatal error in %s for %s %s',
                        handler_name, environ.get('PATH_INFO'), environ.get('QUERY_STRING'), exc_info=True)
                    resp = Response('internal error', status=500)
        if resp is None:
            if req.path in ('', '/'):
                resp = self.welcome_response()
            else:
                resp = Response('not found', mimetype='text/plain', status=404)
        return resp(environ, start_response)

    def welcome_response(self):
        from mapstitch.version import version
        text = 'Welcome to MapStitch %s\n\nStatic maps are available at /staticmap\n' % version
        return Response(text, mimetype='text/plain')
