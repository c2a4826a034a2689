"""
Tests for the HTTP front end.
"""
import json
import threading
import urllib.error
import urllib.request

import pytest

from finnlang.runner import run_source
from finnlang.server import FinnServer, execute_with_timeout


def _in_process(source, timeout):
    return run_source(source, "<request>").to_json()


@pytest.fixture
def server():
    httpd = FinnServer(("127.0.0.1", 0), run_timeout=2.0, execute=_in_process)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()
    thread.join()


def _url(httpd, path="/run"):
    host, port = httpd.server_address[:2]
    return f"http://{host}:{port}{path}"


def _post(httpd, body: bytes, path="/run"):
    request = urllib.request.Request(
        _url(httpd, path),
        data=body,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=10) as response:
            return response.status, response.headers, json.loads(response.read())
    except urllib.error.HTTPError as e:
        return e.code, e.headers, json.loads(e.read())


def test_run_success(server):
    status, headers, payload = _post(server, json.dumps({"code": 'woof("hi");'}).encode())
    assert status == 200
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert payload == {"success": True, "output": "hi\n"}


def test_run_failure(server):
    status, _, payload = _post(server, json.dumps({"code": "woof(1 / 0);"}).encode())
    assert status == 200
    assert payload["success"] is False
    assert payload["error"].startswith("DivisionByZeroException: Division by zero")
    assert "output" not in payload


@pytest.mark.parametrize(
    "body",
    [b"not json", b"[1, 2]", b'{"source": "woof(1);"}', b'{"code": 5}'],
)
def test_bad_requests(server, body):
    status, _, payload = _post(server, body)
    assert status == 400
    assert payload["success"] is False


def test_unknown_route(server):
    status, _, payload = _post(server, b'{"code": ""}', path="/nope")
    assert status == 404
    assert payload["success"] is False


def test_cors_preflight(server):
    request = urllib.request.Request(_url(server), method="OPTIONS")
    with urllib.request.urlopen(request, timeout=10) as response:
        assert response.status == 204
        assert "POST" in response.headers["Access-Control-Allow-Methods"]


def test_execute_in_child_process():
    payload = execute_with_timeout('woof("child");', 30.0)
    assert payload == {"success": True, "output": "child\n"}


def test_endless_program_times_out():
    payload = execute_with_timeout("while (true) { }", 1.0)
    assert payload == {"success": False, "error": "Code execution timed out (1 seconds)"}
