"""CLI entry point for a single solar estimate.

    uv run solarpiv-estimate --place "28.6139, 77.2090" --when "2024-03-20 12:30" --area 120
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from solarpiv.compute import GeocodingError, run  # noqa: E402
from solarpiv.config import load_settings  # noqa: E402
from solarpiv.i18n import t  # noqa: E402
from solarpiv.models import InvalidConfigurationError, InvalidGeometryError, QueryInput  # noqa: E402
from solarpiv.report import format_report  # noqa: E402


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="solarpiv-estimate",
        description="Estimate rooftop solar potential for a place and time.",
    )
    p.add_argument("--place", required=True, help='"lat, lng" or an address')
    p.add_argument("--when", default="", help='local time "YYYY-MM-DD HH:MM" (default: now)')
    p.add_argument("--area", type=float, default=0.0, help="installation area in m²")
    p.add_argument("--tilt", type=float, default=30.0, help="panel tilt in degrees")
    p.add_argument("--orientation", default="south", help="north, south, east or west")
    p.add_argument("--efficiency", type=float, default=20.0, help="panel efficiency in percent")
    p.add_argument("--obstructed", action="store_true", help="nearby obstructions cast shade")
    p.add_argument("--lang", default="en", choices=("en", "ko"))
    return p


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    query = QueryInput(
        place=args.place,
        when=args.when,
        area=args.area,
        tilt=args.tilt,
        orientation=args.orientation,
        efficiency=args.efficiency,
        obstructed=args.obstructed,
    )
    try:
        estimate = run(query, settings)
    except GeocodingError as e:
        print(t("error_address", args.lang).format(error=e), file=sys.stderr)
        return 1
    except (InvalidConfigurationError, InvalidGeometryError) as e:
        print(t("error_input", args.lang).format(error=e), file=sys.stderr)
        return 2

    print(format_report(estimate, args.lang))
    return 0


if __name__ == "__main__":
    sys.exit(main())
