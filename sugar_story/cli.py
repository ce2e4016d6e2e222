# cli.py
# Render the three scenes to HTML (and optionally PNG)
# Usage: python -m sugar_story --data data.csv --out-dir out

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sugar_story import config
from sugar_story.app import SugarStory
from sugar_story.render_altair import save_html, surface_to_chart
from sugar_story.render_matplotlib import save_png
from sugar_story.scenes import SCENES


def setup_logging(log_level: str = config.LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=config.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sugar story: three scenes about sugar in drinks")
    parser.add_argument("--data", default=config.DATA_SOURCE,
                        help=f"CSV or Excel file with the drinks (default: {config.DATA_SOURCE})")
    parser.add_argument("--out-dir", default=config.OUT_DIR,
                        help=f"Where to write the scenes (default: {config.OUT_DIR})")
    parser.add_argument("--png", action="store_true", help="Also save a static PNG per scene")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    story = SugarStory(source=args.data)
    if asyncio.run(story.start()) is None:
        print(f"ERROR: {story.narrative.text}")
        return 1

    out_dir = Path(args.out_dir)
    for scene in SCENES:
        story.select_scene(scene.index)
        chart = surface_to_chart(story.surface, story.controls, story.narrative.text)
        print(f"Saved: {save_html(chart, out_dir / config.HTML_NAME.format(index=scene.index))}")
        if args.png:
            print(f"Saved: {save_png(story.surface, out_dir / config.PNG_NAME.format(index=scene.index))}")

    print("Open the HTML files in your browser to view the interactive charts.")
    return 0
