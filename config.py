import os
from dotenv import load_dotenv

load_dotenv()

# ── Dataset ───────────────────────────────────────────────────────────────────
DATASET_URL = os.getenv(
    "DATASET_URL",
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/global-temperature.json",
)
USER_AGENT = os.getenv("USER_AGENT", "TemperatureHeatmap/1.0 (global-temperature)")

# ── Output ────────────────────────────────────────────────────────────────────
HEATMAP_OUTPUT_PATH = os.getenv("HEATMAP_OUTPUT_PATH", "output/heatmap.html")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ── Layout (pixels) ───────────────────────────────────────────────────────────
CHART_WIDTH = 1000
CHART_HEIGHT = 500
MARGIN = {
    "top": 100,
    "right": 20,
    "bottom": 100,
    "left": 95,
}

# ── Color scale ───────────────────────────────────────────────────────────────
NUM_COLORS = 10  # RdYlBu classes, reversed so red is hot

# ── Axes ──────────────────────────────────────────────────────────────────────
YEAR_TICK_INTERVAL = 10  # only years divisible by this get a tick label
TICK_SIZE = 6
TICK_PADDING = 3
X_LABEL = "Years"
Y_LABEL = "Months"

# ── Headers ───────────────────────────────────────────────────────────────────
TITLE = "Monthly Global Land-Surface Temperature"
SUBTITLE_TEMPLATE = "Base temperature: {base}℃ ({min_year} to {max_year})"

# ── Legend ────────────────────────────────────────────────────────────────────
LEGEND_OFFSET = 50  # distance below the plot area
LEGEND_ITEM_SIZE = 20

# ── Tooltip ───────────────────────────────────────────────────────────────────
TOOLTIP_OPACITY = 0.8
TOOLTIP_DURATION_MS = 300
TOOLTIP_OFFSET = (20, -40)  # (x, y) from the pointer
