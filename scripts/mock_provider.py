"""
Local stand-in for the plan provider.

Serves one or more XML feeds at /api/events, cycling through them on each
request so consecutive syncs see the feed change. Set
MOCK_PROVIDER_FAIL_EVERY=n to answer every n-th request with a 503 and watch
the client retry.

    MOCK_PROVIDER_FILES=tests/fixtures/valid_sample.xml python scripts/mock_provider.py
    PROVIDER_URL=http://localhost:8081/api/events flask --app run sync
"""
import http.server
import itertools
import os
import socketserver
import threading

PORT = int(os.environ.get("MOCK_PROVIDER_PORT") or 8081)
FEED_PATH = "/api/events"
XML_FILES = (
    os.environ.get("MOCK_PROVIDER_FILES") or "tests/fixtures/valid_sample.xml"
).split(",")
FAIL_EVERY = int(os.environ.get("MOCK_PROVIDER_FAIL_EVERY") or 0)

_feeds = itertools.cycle(XML_FILES)
_request_count = itertools.count(1)
_lock = threading.Lock()


class FeedRequestHandler(http.server.BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path.split("?")[0] != FEED_PATH:
            self.send_error(404, "Not found")
            return

        with _lock:
            request_number = next(_request_count)
            xml_file = next(_feeds)

        if FAIL_EVERY and request_number % FAIL_EVERY == 0:
            self.send_error(503, "Simulated provider outage")
            return

        if not os.path.exists(xml_file):
            self.send_error(404, f"Feed file {xml_file} not found")
            return

        with open(xml_file, "rb") as f:
            body = f.read()
        self.send_response(200)
        self.send_header("Content-Type", "application/xml")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


if __name__ == "__main__":
    with socketserver.ThreadingTCPServer(("", PORT), FeedRequestHandler) as httpd:
        print(f"Serving {len(XML_FILES)} feed(s) at http://localhost:{PORT}{FEED_PATH}")
        httpd.serve_forever()
