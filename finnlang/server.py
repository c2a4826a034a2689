"""HTTP front end for FinnLang.

Serves a single endpoint:

    POST /run   {"code": "<source>"}

and answers with JSON:

    {"success": true, "output": "<captured output>"}
    {"success": false, "error": "<message>"}

Each program runs in a child process that is terminated once the configured
timeout elapses, so an endless loop cannot tie up the server. CORS headers
allow the browser editor to call the endpoint from any origin.

Run with ``python -m finnlang.server [--host HOST] [--port PORT] [--timeout SECONDS]``.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

import argparse
import json
import logging
import multiprocessing
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Optional

from finnlang import config
from finnlang.runner import run_source

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024


def _run_in_child(source: str, conn) -> None:
    """Child process body: run ``source`` and send the response payload back."""
    try:
        conn.send(run_source(source, "<request>").to_json())
    finally:
        conn.close()


def execute_with_timeout(source: str, timeout: float) -> dict:
    """
    Run ``source`` in a separate process, giving up after ``timeout`` seconds.

    Parameters:
        source (str): Program text.
        timeout (float): Seconds to wait for the program to finish.

    Returns:
        dict: The JSON response payload.
    """
    ctx = multiprocessing.get_context("spawn")
    receiver, sender = ctx.Pipe(duplex=False)
    process = ctx.Process(target=_run_in_child, args=(source, sender), daemon=True)
    process.start()
    sender.close()
    try:
        if not receiver.poll(timeout):
            logger.warning("program exceeded %.1f second limit, terminating", timeout)
            return {
                "success": False,
                "error": f"Code execution timed out ({timeout:g} seconds)",
            }
        try:
            return receiver.recv()
        except EOFError:
            logger.error("worker exited with status %s without a result", process.exitcode)
            return {"success": False, "error": "Code execution failed unexpectedly"}
    finally:
        receiver.close()
        if process.is_alive():
            process.terminate()
        process.join()


class RunRequestHandler(BaseHTTPRequestHandler):
    """Request handler for the ``/run`` endpoint."""

    server_version = "FinnLang/0.1"
    server: "FinnServer"

    def _send_json(self, status: HTTPStatus, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self._send_cors_headers()
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_cors_headers(self) -> None:
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "*")

    def _bad_request(self, message: str) -> None:
        logger.warning("rejected request from %s: %s", self.client_address[0], message)
        self._send_json(HTTPStatus.BAD_REQUEST, {"success": False, "error": message})

    def do_OPTIONS(self) -> None:  # noqa: N802 - http.server naming
        """Answer CORS preflight requests."""
        self.send_response(HTTPStatus.NO_CONTENT)
        self._send_cors_headers()
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_POST(self) -> None:  # noqa: N802 - http.server naming
        """Run the submitted program."""
        try:
            length = int(self.headers.get("Content-Length", "0"))
            if length < 0:
                raise ValueError(length)
        except ValueError:
            self._bad_request("Invalid Content-Length header")
            return
        if length > MAX_BODY_BYTES:
            self._bad_request("Request body too large")
            return

        raw = self.rfile.read(length)
        if self.path.rstrip("/") != "/run":
            self._send_json(HTTPStatus.NOT_FOUND, {"success": False, "error": f"No route for {self.path}"})
            return

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self._bad_request(f"Invalid JSON body: {e}")
            return
        if not isinstance(payload, dict) or not isinstance(payload.get("code"), str):
            self._bad_request('Request body must be a JSON object with a string "code" field')
            return

        response = self.server.execute(payload["code"], self.server.run_timeout)
        self._send_json(HTTPStatus.OK, response)

    def log_message(self, format: str, *args) -> None:  # noqa: A002 - signature from base class
        logger.info("%s - %s", self.address_string(), format % args)


class FinnServer(ThreadingHTTPServer):
    """HTTP server that runs FinnLang programs."""

    daemon_threads = True

    def __init__(
        self,
        address: tuple[str, int],
        run_timeout: float = config.DEFAULT_TIMEOUT,
        execute: Optional[Callable[[str, float], dict]] = None,
    ):
        super().__init__(address, RunRequestHandler)
        self.run_timeout = run_timeout
        # Callable taking (source, timeout) and returning the response payload.
        self.execute = execute or execute_with_timeout


def main(argv: list[str] | None = None) -> int:
    """Start the HTTP front end."""
    parser = argparse.ArgumentParser(description="Serve FinnLang over HTTP")
    parser.add_argument("--host", default=None, help="interface to bind (default: FINN_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="port to listen on (default: PORT or 3000)")
    parser.add_argument("--timeout", type=float, default=None, help="seconds a program may run (default: FINN_TIMEOUT or 5)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if config.debug_enabled() else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        host = args.host or config.server_host()
        port = args.port if args.port is not None else config.server_port()
        timeout = args.timeout if args.timeout is not None else config.run_timeout()
    except ValueError as e:
        parser.error(str(e))

    httpd = FinnServer((host, port), run_timeout=timeout)
    logger.info("Server listening on http://%s:%d", host, httpd.server_address[1])
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        httpd.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
