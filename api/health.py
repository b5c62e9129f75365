"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

from src.utils.config import AppConfig


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def _send_status(self):
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        response = json.dumps({"status": "ok", "service": AppConfig.SERVICE_NAME})
        self.wfile.write(response.encode('utf-8'))

    def do_GET(self):
        """Handle GET request."""
        self._send_status()

    def do_HEAD(self):
        """Load balancer probes; headers only."""
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
