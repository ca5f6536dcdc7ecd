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

import optparse
import re
import sys
import textwrap
import logging

from mapstitch.version import version


def setup_logging(level=logging.INFO, format=None):
    mapstitch_log = logging.getLogger('mapstitch')
    mapstitch_log.setLevel(level)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    if not format:
        format = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format)
    ch.setFormatter(formatter)
    mapstitch_log.addHandler(ch)

def serve_develop_command(args):
    parser = optparse.OptionParser("usage: %prog serve-develop [options] mapstitch.yaml")
    parser.add_option("-b", "--bind",
                      dest="address", default='127.0.0.1:8080',
                      help="Server socket [127.0.0.1:8080]. Use 0.0.0.0 for external access. :1234 to change port.")
    parser.add_option("--debug", default=False, action='store_true',
                      dest="debug",
                      help="Enable debug mode")
    options, args = parser.parse_args(args)

    if len(args) != 2:
        parser.print_help()
        print("\nERROR: MapStitch configuration required.")
        sys.exit(1)

    mapstitch_conf = args[1]

    host, port = parse_bind_address(options.address)

    if options.debug and host not in ('localhost', '127.0.0.1'):
        print(textwrap.dedent("""\
        ################# WARNING! ##################
        Running debug mode with non-localhost address
        is a serious security vulnerability.
        #############################################\
        """))

    if options.debug:
        setup_logging(level=logging.DEBUG)
    else:
        setup_logging()
    from mapstitch.wsgiapp import make_wsgi_app
    from mapstitch.config.loader import ConfigurationError
    from werkzeug.serving import run_simple
    try:
        app = make_wsgi_app(mapstitch_conf, debug=options.debug)
    except ConfigurationError:
        sys.exit(2)

    # no reloader, it would start a second generation worker
    run_simple(host, port, app, use_reloader=False, threaded=True,
        passthrough_errors=True)

def generate_command(args):
    parser = optparse.OptionParser("usage: %prog generate [options]")
    parser.add_option("-f", "--mapstitch-conf", dest="mapstitch_conf",
        help="MapStitch configuration.")
    parser.add_option("--width", dest="width", default='300',
        help="Width of the map in pixel [300].")
    parser.add_option("--height", dest="height", default='300',
        help="Height of the map in pixel [300].")
    parser.add_option("--zoom", dest="zoom", default='0',
        help="Zoom level [0].")
    parser.add_option("--lat", dest="lat", default='0',
        help="Latitude of the map center.")
    parser.add_option("--long", dest="long", default='0',
        help="Longitude of the map center.")
    parser.add_option("--label", dest="label",
        help="Label of the map (default from configuration).")
    parser.add_option("-q", "--quiet", dest="quiet", default=False, action="store_true",
        help="Only print the location of the map.")
    options, args = parser.parse_args(args)

    if len(args) != 1:
        parser.print_help()
        print("\nERROR: unexpected arguments: %s" % ' '.join(args[1:]), file=sys.stderr)
        sys.exit(1)

    if not options.quiet:
        setup_logging(level=logging.WARNING)

    from mapstitch.cache import CacheWriteError
    from mapstitch.config.loader import load_configuration, ConfigurationError
    from mapstitch.request.staticmap import parse_staticmap_request, ValidationError
    from mapstitch.source import TileFetchError

    try:
        conf = load_configuration(mapstitch_conf=options.mapstitch_conf)
    except ConfigurationError as ex:
        print('ERROR: %s' % ex, file=sys.stderr)
        sys.exit(2)

    params = dict(width=options.width, height=options.height, zoom=options.zoom,
                  lat=options.lat, long=options.long)
    if options.label is not None:
        params['label'] = options.label
    try:
        map_request, _ = parse_staticmap_request(params, limits=conf.request_limits(),
                                                 default_label=conf.default_label)
    except ValidationError as ex:
        print('ERROR: %s' % ex, file=sys.stderr)
        sys.exit(1)

    try:
        location = conf.generator().generate_now(map_request)
    except (TileFetchError, CacheWriteError) as ex:
        print('ERROR: %s' % ex, file=sys.stderr)
        sys.exit(2)
    print(location)


def parse_bind_address(address, default=('localhost', 8080)):
    """
    >>> parse_bind_address('80')
    ('localhost', 80)
    >>> parse_bind_address('0.0.0.0')
    ('0.0.0.0', 8080)
    >>> parse_bind_address('0.0.0.0:8081')
    ('0.0.0.0', 8081)
    """
    if ':' in address:
        host, port = address.split(':', 1)
        port = int(port)
        if not host:
            host = default[0]
    elif re.match(r'^\d+$', address):
        host = default[0]
        port = int(address)
    else:
        host = address
        port = default[1]
    return host, port


commands = {
    'serve-develop': {
        'func': serve_develop_command,
        'help': 'Run MapStitch development server.'
    },
    'generate': {
        'func': generate_command,
        'help': 'Create a single static map and print its location.'
    },
}


class NonStrictOptionParser(optparse.OptionParser):
    def _process_args(self, largs, rargs, values):
        while rargs:
            arg = rargs[0]
            # bare "--" ends the options, bare "-" is a normal argument
            try:
                if arg == "--":
                    del rargs[0]
                    return
                elif arg[0:2] == "--":
                    self._process_long_opt(rargs, values)
                elif arg[:1] == "-" and len(arg) > 1:
                    self._process_short_opts(rargs, values)
                elif self.allow_interspersed_args:
                    largs.append(arg)
                    del rargs[0]
                else:
                    return
            except optparse.BadOptionError:
                largs.append(arg)


def print_items(data, title='Commands'):
    name_len = max(len(name) for name in data)

    if title:
        print('%s:' % (title, ), file=sys.stdout)
    for name, item in sorted(data.items()):
        help = item.get('help', '')
        name = ('%%-%ds' % name_len) % name
        if help:
            help = '  ' + help
        print('  %s%s' % (name, help), file=sys.stdout)

def main():
    parser = NonStrictOptionParser("usage: %prog COMMAND [options]",
        add_help_option=False)
    options, args = parser.parse_args()

    if len(args) < 1 or args[0] in ('--help', '-h'):
        parser.print_help()
        print()
        print_items(commands)
        sys.exit(1)

    if len(args) == 1 and args[0] == '--version':
        print('MapStitch ' + version)
        sys.exit(1)

    command = args[0]
    if command not in commands:
        parser.print_help()
        print()
        print_items(commands)
        print('\nERROR: unknown command %s' % (command,), file=sys.stdout)
        sys.exit(1)

    args = sys.argv[0:1] + sys.argv[2:]
    commands[command]['func'](args)

if __name__ == '__main__':
    main()
