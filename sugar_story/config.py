# config.py
# Settings for the sugar story: data source, surface geometry, timings, text

import os

# --------- Data ---------
DATA_SOURCE = os.getenv("SUGAR_STORY_DATA", "data.csv")
REQUIRED_COLUMNS = ["Beverage", "Beverage_category", "Beverage_prep", "Calories"]
SUGAR_COLUMNS = ["Sugars (g)", " Sugars (g)"]  # header sometimes has a leading space
DEFAULT_CATEGORY = "Other"
CATEGORY_MARKS = ["™"]

# Retry policy for the data fetch
LOAD_RETRIES = 3
RETRY_DELAY_SECONDS = 1.0

# --------- Surface ---------
WIDTH = 960
HEIGHT = 600
MARGIN = {"top": 60, "right": 80, "bottom": 80, "left": 120}
NATURE_SANS = "Helvetica Neue, Helvetica, Arial, sans-serif"
STROKE = "#333"

# --------- Sugar tiers (grams) ---------
HIGH_SUGAR = 50
MODERATE_SUGAR = 30

# --------- Animation (ms) ---------
OVERVIEW_GROW_MS = 1000
RANKED_GROW_MS = 1500
RANKED_STAGGER_MS = 100
LABEL_FADE_MS = 500
POINT_GROW_MS = 1000
POINT_STAGGER_MS = 2
HOVER_MS = 100
TOOLTIP_IN_MS = 200
TOOLTIP_OUT_MS = 500

# --------- Scenes ---------
TOP_N = 10
SLIDER_STEP = 5
SCENE_DESCRIPTIONS = [
    "Starbucks offers something for everyone, but some categories hide a LOT of sugar. "
    "Let's start with a birds-eye view.",
    "Here are the worst offenders. How much sugar is lurking in your favorite drink?",
    "Now it's your turn: filter and explore every drink to find healthier (or less healthy) options.",
]
LOADING_MESSAGE = "Loading data, please wait..."
LOAD_ERROR_MESSAGE = (
    "Error loading data. Please check that data.csv is available "
    "and that you're running this on a web server."
)
NO_DATA_MESSAGE = "No drinks with valid nutrition data were found."

# --------- Output ---------
OUT_DIR = "out"
HTML_NAME = "scene_{index}.html"
PNG_NAME = "scene_{index}.png"

# --------- Logging ---------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
