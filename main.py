#!/usr/bin/env python3
"""
Global land-surface temperature heat map.

Fetches the monthly variance dataset once, renders the heat map (cells,
axes, legend, tooltip) and writes it as a standalone HTML page.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import aiohttp

import config
from services.data_loader import load_dataset
from services.document import render_document, write_document
from services.renderer import render
from utils.dataset_client import DatasetClient

logger = logging.getLogger("temperature_heatmap")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def main(output_path: str | Path | None = None) -> int:
    """Load, render and write the chart. Returns a process exit code."""
    async with aiohttp.ClientSession(
        headers={"User-Agent": config.USER_AGENT}
    ) as session:
        dataset = await load_dataset(DatasetClient(session=session))

    if dataset is None:
        logger.error("No dataset, chart not rendered")
        return 1

    chart = render(dataset)
    write_document(output_path or config.HEATMAP_OUTPUT_PATH, render_document(chart.root))
    return 0


def run() -> None:
    _configure_logging()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
