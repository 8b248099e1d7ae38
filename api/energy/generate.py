"""
Vercel Python Function for energy schedule generation.

This endpoint handles POST requests to /api/energy/generate and returns the
day's energy windows derived from a WHOOP sleep and recovery record.

Body: {"sleep": {...}, "recovery": {...}, "chronotypeOffsetHours"?: number, "dayDate"?: str}
"""

from http.server import BaseHTTPRequestHandler
import json
import logging
import sys
from pathlib import Path

# Add the _python directory to the Python path for importing energy_model
sys.path.insert(0, str(Path(__file__).parent.parent / "_python"))

from energy_model.errors import InvalidSleepRecordError
from energy_model.model import build_energy_schedule_from_whoop
from energy_model.wire import to_wire_dict

logger = logging.getLogger(__name__)

# Users run slightly later than their measured wake by default
DEFAULT_CHRONOTYPE_OFFSET_HOURS = 0.5


def validate_request(data) -> str | None:
    """Validate request data, return error message or None if valid."""
    if not isinstance(data, dict):
        return "Request body must be a JSON object"
    if not data.get("sleep") or not data.get("recovery"):
        return "Missing required fields: sleep and recovery"
    return None


class handler(BaseHTTPRequestHandler):
    """HTTP handler for Vercel Python Functions."""

    def do_POST(self):
        """Handle POST requests for energy schedule generation."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length)
            data = json.loads(body)

            validation_error = validate_request(data)
            if validation_error:
                self._send_json_response(400, {"error": validation_error})
                return

            output = build_energy_schedule_from_whoop(
                data["sleep"],
                data["recovery"],
                {
                    "chronotypeOffsetHours": data.get(
                        "chronotypeOffsetHours", DEFAULT_CHRONOTYPE_OFFSET_HOURS
                    ),
                    "dayDate": data.get("dayDate"),
                },
            )

            self._send_json_response(200, to_wire_dict(output))

        except json.JSONDecodeError:
            self._send_json_response(400, {"error": "Invalid JSON in request body"})
        except InvalidSleepRecordError as e:
            self._send_json_response(400, {"error": str(e)})
        except Exception:
            logger.exception("Energy model error")
            self._send_json_response(500, {"error": "Internal server error"})

    def _send_json_response(self, status_code: int, data: dict):
        """Send a JSON response with the given status code."""
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
