"""HTTP/WebSocket API for the dashboard.

Endpoints:
    GET  /api/status            - Snapshot of every configured service
    GET  /api/logs/{service}    - Last N log lines (``?lines=100``)
    GET  /api/streams           - Open live log streams
    POST /api/restart/{service} - Rollout restart
    GET  /health                - Liveness
    WS   /?service={service}    - Live log stream (any path)
    GET  /, /{path}             - Static front-end bundle
"""

from .app import create_app
from .server import Server, ServerInfo

__all__ = [
    "Server",
    "ServerInfo",
    "create_app",
]
