"""
Integration tests against a local HTTP server that verifies signatures.
"""

import datetime
import hmac
import json
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from hmac_http_client import HMACClient, HTTPStatusError, compute_hash, to_ticks

CLIENT_ID = "client1"
SECRET_KEY = "python-client-demo-secret"
MAX_SKEW = datetime.timedelta(minutes=5)


@dataclass
class Widget:
    id: int
    name: str


def verify(headers, secrets=None, hash_header="Hash", timestamp_header="Timestamp"):
    """Recompute the hash the way the verifying service does."""
    secrets = secrets or {CLIENT_ID: SECRET_KEY}
    timestamp = headers.get(timestamp_header)
    payload = headers.get(hash_header)
    if not timestamp or not payload or ":" not in payload:
        return False

    client_id, hash_value = payload.split(":", 1)
    if client_id not in secrets:
        return False

    signed_at = datetime.datetime.strptime(
        timestamp[:-2], "%Y-%m-%dT%H:%M:%S.%f"
    ).replace(tzinfo=datetime.timezone.utc)
    if abs(datetime.datetime.now(datetime.timezone.utc) - signed_at) > MAX_SKEW:
        return False

    expected = compute_hash(secrets[client_id], to_ticks(signed_at))
    return hmac.compare_digest(expected, hash_value)


class VerifyingHandler(BaseHTTPRequestHandler):
    widgets = {}

    def log_message(self, format, *args):
        pass

    def _reply(self, status, payload=None):
        body = b"" if payload is None else json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _authorized(self):
        if not verify(self.headers):
            self._reply(401, {"error": "unauthorized"})
            return False
        return True

    def _read_json(self):
        length = int(self.headers.get("Content-Length", 0))
        return json.loads(self.rfile.read(length))

    def do_GET(self):
        if not self._authorized():
            return
        if self.path == "/api/widgets":
            self._reply(200, list(self.widgets.values()))
        elif self.path.startswith("/api/widgets/"):
            widget = self.widgets.get(self.path.rsplit("/", 1)[1])
            self._reply(200 if widget else 404, widget)
        else:
            self._reply(404, {"error": "not found"})

    def do_POST(self):
        if not self._authorized():
            return
        item = self._read_json()
        if not item.get("name"):
            self._reply(400, {"error": "name required"})
            return
        item["id"] = len(self.widgets) + 1
        self.widgets[str(item["id"])] = item
        self._reply(201, item)

    def do_PUT(self):
        if not self._authorized():
            return
        key = self.path.rsplit("/", 1)[1]
        if key not in self.widgets:
            self._reply(404, {"error": "not found"})
            return
        item = self._read_json()
        item["id"] = int(key)
        self.widgets[key] = item
        self._reply(200, item)

    def do_DELETE(self):
        if not self._authorized():
            return
        key = self.path.rsplit("/", 1)[1]
        if self.widgets.pop(key, None) is None:
            self._reply(404)
        else:
            self._reply(204)


class TestIntegration:
    """Integration tests with a verifying server."""

    @pytest.fixture(scope="class")
    def server_url(self):
        """Start a verifying server for integration tests."""
        VerifyingHandler.widgets = {}
        server = ThreadingHTTPServer(("127.0.0.1", 0), VerifyingHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()

        yield f"http://127.0.0.1:{server.server_address[1]}/"

        server.shutdown()
        server.server_close()

    @pytest.fixture
    def client(self, server_url):
        """Create authenticated HMAC client."""
        with HMACClient(server_url, (CLIENT_ID, SECRET_KEY)) as client:
            yield client

    def test_protected_endpoint_without_auth(self, server_url):
        response = requests.get(f"{server_url}api/widgets")

        assert response.status_code == 401

    def test_crud_round(self, client):
        created = client.post("api/widgets", Widget(0, "gear"), into=Widget)
        assert created.name == "gear"
        assert created.id > 0

        fetched = client.get(f"api/widgets/{created.id}", into=Widget)
        assert fetched == created

        updated = client.put(f"api/widgets/{created.id}", Widget(created.id, "cog"), into=Widget)
        assert updated == Widget(created.id, "cog")

        assert client.delete(f"api/widgets/{created.id}") == 204
        assert client.delete(f"api/widgets/{created.id}") == 404

    def test_post_rejected_raises(self, client):
        with pytest.raises(HTTPStatusError) as excinfo:
            client.post("api/widgets", {"name": ""})

        assert excinfo.value.status_code == 400

    def test_wrong_secret_key(self, server_url):
        """Test that wrong secret key results in authentication failure."""
        with HMACClient(server_url, (CLIENT_ID, "wrong-secret-key")) as wrong_client:
            assert wrong_client.delete("api/widgets/1") == 401

            with pytest.raises(HTTPStatusError) as excinfo:
                wrong_client.post("api/widgets", {"name": "gear"})
            assert excinfo.value.status_code == 401

    def test_unknown_client_id(self, server_url):
        with HMACClient(server_url, ("someone-else", SECRET_KEY)) as other_client:
            assert other_client.get("api/widgets") == {"error": "unauthorized"}

    def test_concurrent_requests(self, client):
        """Test concurrent authenticated requests."""
        results = []
        lock = threading.Lock()

        def make_request(i):
            widget = client.post("api/widgets", {"name": f"widget-{i}"})
            with lock:
                results.append(widget)

        threads = [threading.Thread(target=make_request, args=(i,)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 5
        assert all("id" in widget for widget in results)
