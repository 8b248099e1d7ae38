"""
Print energy schedules for manual review.

With --sleep-json/--recovery-json, renders that night. Without them, runs a set
of sample nights spanning push, balanced and conserve days.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from energy_model.model import build_energy_schedule_from_whoop
from energy_model.types import EnergyModelOutput
from energy_model.wire import to_wire_dict


def make_night(
    start: str,
    end: str,
    performance: float,
    consistency: float,
    debt_hours: float,
    recovery: float,
    offset: str = "-05:00",
) -> tuple[dict, dict]:
    """Build a (sleep, recovery) payload pair in WHOOP v2 shape."""
    sleep = {
        "start": start,
        "end": end,
        "timezone_offset": offset,
        "score": {
            "sleep_performance_percentage": performance,
            "sleep_consistency_percentage": consistency,
            "sleep_needed": {"need_from_sleep_debt_milli": int(debt_hours * 3_600_000)},
        },
    }
    return sleep, {"score": {"recovery_score": recovery}}


SAMPLE_NIGHTS = [
    {
        "name": "Well rested",
        "night": make_night(
            "2026-01-15T03:10:00.000Z", "2026-01-15T11:40:00.000Z", 96, 88, 0.1, 82
        ),
    },
    {
        "name": "Green sleep, yellow recovery",
        "night": make_night(
            "2022-04-24T02:25:44.774Z", "2022-04-24T10:25:44.774Z", 98, 90, 0.098, 44
        ),
    },
    {
        "name": "Short night with debt",
        "night": make_night(
            "2026-01-16T05:30:00.000Z", "2026-01-16T11:00:00.000Z", 62, 55, 1.8, 48
        ),
    },
    {
        "name": "Red recovery, heavy debt",
        "night": make_night(
            "2026-01-17T06:45:00.000Z", "2026-01-17T11:15:00.000Z", 40, 30, 4.5, 18
        ),
    },
]


def format_schedule(name: str, output: EnergyModelOutput) -> str:
    """Format a schedule as readable text."""
    lines = []
    lines.append("=" * 70)
    lines.append(name)
    lines.append(f"Wake: {output.wake_time_display} ({output.wake_time_iso})")
    lines.append(
        f"Sleep: {output.sleep_duration_hours:.2f}h | Debt: {output.sleep_debt_hours:.2f}h | "
        f"Perf: {output.sleep_performance_percentage:.0f}% | "
        f"Recovery: {output.recovery_score:.0f}%"
    )
    lines.append(f"Day mode: {output.day_mode} | Capacity: {output.overall_capacity:.1f}")
    lines.append("=" * 70)

    for segment in output.segments:
        lines.append(
            f"  {segment.label:<17} {segment.category:<10} "
            f"{segment.duration_hours:5.2f}h  energy {segment.energy:.2f}"
        )
        lines.append(f"      {segment.start_display} -> {segment.end_display}")

    lines.append("")
    return "\n".join(lines)


def read_json(path: str) -> dict:
    with open(path) as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(description="Print WHOOP-derived energy schedules")
    parser.add_argument("--sleep-json", help="Path to a WHOOP sleep record")
    parser.add_argument("--recovery-json", help="Path to a WHOOP recovery record")
    parser.add_argument("--chronotype-offset-hours", type=float, default=0.5)
    parser.add_argument("--day-date", help="Day label (YYYY-MM-DD)")
    parser.add_argument("--json", action="store_true", help="Print raw wire JSON")
    parser.add_argument("--verbose", action="store_true", help="Log model internals")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = {"chronotypeOffsetHours": args.chronotype_offset_hours, "dayDate": args.day_date}

    if args.sleep_json:
        recovery = read_json(args.recovery_json) if args.recovery_json else {}
        nights = [(args.sleep_json, (read_json(args.sleep_json), recovery))]
    else:
        nights = [(sample["name"], sample["night"]) for sample in SAMPLE_NIGHTS]

    for name, (sleep, recovery) in nights:
        output = build_energy_schedule_from_whoop(sleep, recovery, config)
        if args.json:
            print(json.dumps(to_wire_dict(output), indent=2))
        else:
            print(format_schedule(name, output))


if __name__ == "__main__":
    main()
