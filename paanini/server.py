"""HTTP front end exposing the interpreter as a service.

Endpoints:

``POST /api/run``
    Body ``{"code": "<source>"}``; answers ``{"output": ..., "errors": [...]}``.
    Every request runs against its own copy of the server's base context,
    so nothing one request defines is visible to the next.

``GET /health``
    Liveness probe.
"""

from __future__ import annotations

import json
import sys
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional, Tuple

from .interpreter import Interpreter, RunResult
from .keywords import VERSION

SERVICE_NAME = 'paanini-ide'
DEFAULT_PORT = 8080


def run_code(base: Interpreter, code: str) -> RunResult:
    """Run *code* against a private copy of *base*."""
    return base.copy().run(code)


class PaaniniRequestHandler(BaseHTTPRequestHandler):
    server_version = f"PaaniniIDE/{VERSION}"

    def log_message(self, fmt, *args):
        if getattr(self.server, 'quiet', False):
            return
        super().log_message(fmt, *args)

    def send_json(self, status: int, body: Dict[str, Any]):
        data = json.dumps(body, ensure_ascii=False).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json; charset=utf-8')
        self.send_header('Content-Length', str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self):
        if self.path == '/health':
            self.send_json(200, {'status': 'healthy', 'service': SERVICE_NAME, 'version': VERSION})
            return
        self.send_json(404, {'error': f'not found: {self.path}'})

    def do_POST(self):
        if self.path != '/api/run':
            self.send_json(404, {'error': f'not found: {self.path}'})
            return
        code, problem = self.read_code()
        if code is None:
            self.send_json(400, {'error': problem})
            return
        result = run_code(self.server.base, code)
        self.send_json(200, {'output': result.output, 'errors': result.errors})

    def read_code(self) -> Tuple[Optional[str], str]:
        length = int(self.headers.get('Content-Length', '0') or 0)
        raw = self.rfile.read(length) if length else b''
        try:
            payload = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None, 'request body must be JSON'
        if not isinstance(payload, dict) or not isinstance(payload.get('code'), str):
            return None, "request body needs a string field 'code'"
        return payload['code'], ''


class PaaniniServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], base: Optional[Interpreter] = None, quiet: bool = False):
        super().__init__(address, PaaniniRequestHandler)
        # never run against directly; requests get copies
        self.base = base if base is not None else Interpreter()
        self.quiet = quiet


def start_server(host: str = '0.0.0.0', port: int = DEFAULT_PORT, quiet: bool = False) -> None:
    server = PaaniniServer((host, port), quiet=quiet)
    print(f"Paanini IDE server running at http://localhost:{server.server_address[1]}")
    print("POST Paanini source as JSON {\"code\": ...} to /api/run")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down.", file=sys.stderr)
    finally:
        server.server_close()
