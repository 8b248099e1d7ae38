#!/usr/bin/env python3
"""
Generate an energy schedule from a JSON request file.

Usage: python3 generate_energy.py <request_file.json>

The request file holds {"sleep": {...}, "recovery": {...},
"chronotypeOffsetHours"?: number, "dayDate"?: "YYYY-MM-DD"} and the schedule is
written as JSON to stdout.

Security: This script only reads from the specified JSON file and writes
to stdout. It does not accept any code or commands as input.
"""

import json
import sys

# Import energy modules (assumes api/_python is in path or script is run from there)
from energy_model.errors import InvalidSleepRecordError
from energy_model.model import build_energy_schedule_from_whoop
from energy_model.wire import to_wire_dict


def main() -> None:
    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: generate_energy.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        output = build_energy_schedule_from_whoop(
            data["sleep"],
            data["recovery"],
            {
                "chronotypeOffsetHours": data.get("chronotypeOffsetHours", 0),
                "dayDate": data.get("dayDate"),
            },
        )

        print(json.dumps(to_wire_dict(output)))

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
        sys.exit(1)
    except KeyError as e:
        print(json.dumps({"error": f"Missing required field: {e}"}))
        sys.exit(1)
    except InvalidSleepRecordError as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)
    except Exception as e:
        print(json.dumps({"error": f"Energy schedule generation failed: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
