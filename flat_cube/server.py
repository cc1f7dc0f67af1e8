"""HTTP API server for the flat cube."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .actions import move_name
from .engine import FlatCubeEngine
from .state_codec import CubeValidationError, grid_to_json


class FlatCubeHTTPServer:
    def __init__(
        self,
        engine: FlatCubeEngine,
        host: str = "127.0.0.1",
        port: int = 8000,
        mode: str = "headless",
    ):
        self.engine = engine
        self.mode = mode
        self._lock = threading.RLock()

        handler_cls = self._build_handler()
        self.httpd = ThreadingHTTPServer((host, port), handler_cls)
        self.host, self.port = self.httpd.server_address[:2]

    def _build_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            server_version = "FlatCube/1.0"

            def log_message(self, fmt: str, *args):
                return

            def _send_json(self, code: int, payload: dict[str, Any]):
                body = json.dumps(payload).encode("utf-8")
                self.send_response(code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def _read_json(self) -> dict[str, Any]:
                length = int(self.headers.get("Content-Length", "0"))
                if length == 0:
                    return {}
                data = self.rfile.read(length)
                try:
                    obj = json.loads(data.decode("utf-8"))
                except json.JSONDecodeError as exc:
                    raise CubeValidationError(f"Invalid JSON body: {exc}") from exc
                if not isinstance(obj, dict):
                    raise CubeValidationError("JSON body must be an object")
                return obj

            def _face_payload(self) -> dict[str, Any]:
                return {
                    "orientation": parent.engine.orientation,
                    "grid": grid_to_json(parent.engine.current_face()),
                }

            def do_GET(self):
                with parent._lock:
                    if self.path == "/health":
                        self._send_json(
                            200,
                            {
                                "mode": parent.mode,
                                "width": parent.engine.width,
                                "height": parent.engine.height,
                                "ready": True,
                            },
                        )
                        return

                    if self.path == "/state":
                        self._send_json(200, parent.engine.state_payload())
                        return

                    if self.path == "/face":
                        self._send_json(200, self._face_payload())
                        return

                self._send_json(404, {"error": "Not Found"})

            def do_POST(self):
                try:
                    body = self._read_json()
                    with parent._lock:
                        if self.path == "/rotate":
                            for field in ("axis", "index", "direction"):
                                if field not in body:
                                    raise CubeValidationError(f"Missing required field: {field}")
                            parent.engine.rotate(body["axis"], body["index"], body["direction"])
                            payload = self._face_payload()
                            payload["move"] = move_name(parent.engine.history[-1])
                            payload["step_count"] = parent.engine.step_count
                            self._send_json(200, payload)
                            return

                        if self.path == "/look":
                            if "face" not in body:
                                raise CubeValidationError("Missing required field: face")
                            parent.engine.look_at(body["face"])
                            self._send_json(200, self._face_payload())
                            return

                        if self.path == "/reset":
                            parent.engine.reset()
                            self._send_json(200, parent.engine.state_payload())
                            return

                        if self.path == "/scramble":
                            if "steps" not in body:
                                raise CubeValidationError("Missing required field: steps")
                            seed = body.get("seed")
                            if seed is not None and not isinstance(seed, int):
                                raise CubeValidationError("seed must be an integer or null")
                            _, moves = parent.engine.scramble(steps=body["steps"], seed=seed)
                            payload = parent.engine.state_payload()
                            payload["moves"] = [move_name(m) for m in moves]
                            self._send_json(200, payload)
                            return

                except CubeValidationError as exc:
                    self._send_json(400, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

        return Handler

    def serve_forever(self):
        self.httpd.serve_forever()

    def start_background(self, daemon: bool = True) -> threading.Thread:
        thread = threading.Thread(target=self.serve_forever, daemon=daemon)
        thread.start()
        return thread

    def shutdown(self):
        self.httpd.shutdown()
        self.httpd.server_close()
