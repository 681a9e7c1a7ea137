"""
ghmock command line

Usage:
    ghmock serve backend.yaml --port 8080
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .mock.errors import MockError
from .mock.loader import BackendDefinition
from .mock.server import MockBackend, MockConfig


def cmd_serve(args) -> int:
    """
    Serve a backend definition file until interrupted.

    Args:
        args: Parsed command-line arguments
    """
    print(f"🎭 ghmock Mock Server")
    print(f"   Backend file: {args.backend_file}")

    try:
        definition = BackendDefinition.from_yaml(args.backend_file)
    except (OSError, MockError) as e:
        print(f"❌ Failed to load backend file: {e}")
        return 1

    config = MockConfig(host=args.host, port=args.port, log_level=args.log_level, access_log=True)

    try:
        backend = MockBackend(*definition.to_options(), config=config).start()
    except MockError as e:
        print(f"❌ Failed to start mock server: {e}")
        return 1

    print(f"   Listening on: {backend.url}")
    print(f"   Endpoints: {len(backend.router)}")
    for endpoint in backend.router.endpoints:
        print(f"     {endpoint.method:<7} {endpoint.pattern}")
    print()

    try:
        while backend.running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\n\n👋 Mock server stopped")
    finally:
        try:
            backend.close()
        except MockError as e:
            print(f"⚠️  {e}")
            return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ghmock',
        description='Mocked GitHub REST API backend'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Serve a YAML backend definition')
    serve.add_argument('backend_file', help='YAML backend definition file')
    serve.add_argument('--host', default='127.0.0.1', help='Host to bind to (default: 127.0.0.1)')
    serve.add_argument('--port', type=int, default=8080, help='Port to bind to (default: 8080)')
    serve.add_argument(
        '--log-level',
        default='info',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        help='Log level (default: info)'
    )
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
