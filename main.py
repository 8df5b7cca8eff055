"""
Nearest Location Search — CLI
=============================
Terminal front end for the postcode_locator library.

Usage:
    python main.py                        # interactive mode
    python main.py "RG45 6AJ"             # single search
    python main.py --batch postcodes.csv  # one search per row of the Postcode column

Settings (LOCATIONS_URL, GOOGLE_API_KEY, CACHE_PATH, ...) are read from the
environment or a .env file, see postcode_locator/config.py.
"""
import asyncio
import csv
import html
import re
import sys
from typing import List, Optional

import pandas as pd
from loguru import logger

from postcode_locator import PostcodeLocator
from postcode_locator.config import INPUT_CSV, LOG_LEVEL, OUTPUT_CSV
from postcode_locator.models import Location
from postcode_locator.postcode import normalise, validate
from postcode_locator.search_controller import SearchController

_TAG_RE = re.compile(r"<[^>]+>")


class ConsoleNotifier:
    """Prints the search notifications the way the form's alerts showed them."""

    def invalid_postcode(self, postcode: str) -> None:
        print(f"  ✗ That is not a valid postcode: '{postcode}'")

    def no_locations_found(self, postcode: str) -> None:
        print("  ✗ No locations found")


def html_to_text(description: str) -> str:
    """Strip tags and unescape entities from a location description."""
    return " ".join(html.unescape(_TAG_RE.sub(" ", description)).split())


def display_postcode(raw: str) -> str:
    """Canonical 'OUTWARD INWARD' form for valid postcodes, the trimmed input otherwise."""
    return normalise(raw) if validate(raw) else raw.strip()


def render_location(location: Location, distance: Optional[float], postcode: Optional[str] = None) -> str:
    heading = f"  ✓ {location.title}"
    if postcode:
        heading += f" (nearest to {display_postcode(postcode)})"
    lines = [heading]
    if distance is not None:
        lines.append(f"    {distance:.1f} miles away")
    text = html_to_text(location.description)
    if text:
        lines.append(f"    {text}")
    return "\n".join(lines)


def load_postcodes_from_csv(file_path: str, nrows: int = None) -> List[str]:
    """Load the Postcode column from CSV, skipping empty cells."""
    df = pd.read_csv(file_path, nrows=nrows, dtype=str)
    if "Postcode" not in df.columns:
        raise ValueError(f"{file_path} has no 'Postcode' column")
    return [str(pc).strip() for pc in df["Postcode"] if pd.notna(pc) and str(pc).strip()]


async def run_batch(controller: SearchController, input_path: str, output_path: str) -> None:
    """Search every postcode in *input_path* in turn and write the nearest location per row."""
    postcodes = load_postcodes_from_csv(input_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Postcode", "Title", "DistanceMiles"])
        for postcode in postcodes:
            location = await controller.search(postcode)
            distance = controller.session.distance
            writer.writerow([
                display_postcode(postcode),
                location.title if location else "",
                f"{distance:.2f}" if location and distance is not None else "",
            ])
    print(f"Wrote {len(postcodes)} rows to {output_path}")


async def run_interactive(controller: SearchController) -> None:
    print("Nearest location search. Type 'q' to quit.")
    while True:
        try:
            raw_postcode = input("\nPostcode: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            break

        if raw_postcode.lower() in ("q", "quit", "exit"):
            print("Bye!")
            break

        location = await controller.search(raw_postcode)
        if location is not None:
            print(render_location(location, controller.session.distance, controller.session.postcode))


def configure_logging() -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")


async def main(argv: List[str]) -> int:
    async with PostcodeLocator(notifier=ConsoleNotifier()) as locator:
        controller = locator.controller
        if len(argv) >= 2 and argv[1] == "--batch":
            input_path = argv[2] if len(argv) >= 3 else INPUT_CSV
            await run_batch(controller, input_path, OUTPUT_CSV)
            return 0
        if len(argv) == 2:
            location = await controller.search(argv[1])
            if location is None:
                return 1
            print(render_location(location, controller.session.distance, controller.session.postcode))
            return 0
        await run_interactive(controller)
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main(sys.argv)))
