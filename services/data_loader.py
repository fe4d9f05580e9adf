"""
Dataset loading: one fetch, one transform.

The JSON resource looks like

    {"baseTemperature": 8.66,
     "monthlyVariance": [{"year": 1753, "month": 1, "variance": -1.366}, ...]}

Each entry becomes a TemperatureRecord whose temperature is
baseTemperature + variance.  Any failure is logged and reported as None;
there is no retry and nothing is rendered.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from models.temperature import Dataset, TemperatureRecord
from utils.dataset_client import DatasetClient

logger = logging.getLogger("temperature_heatmap.loader")


class DatasetError(ValueError):
    """The payload does not have the documented shape."""


def parse_dataset(payload: Any) -> Dataset:
    if not isinstance(payload, dict):
        raise DatasetError(f"expected a JSON object, got {type(payload).__name__}")
    try:
        base = payload["baseTemperature"]
        entries = payload["monthlyVariance"]
    except KeyError as exc:
        raise DatasetError(f"missing field {exc}") from exc

    if not isinstance(entries, list):
        raise DatasetError("monthlyVariance must be a list")
    if not entries:
        raise DatasetError("monthlyVariance is empty")

    records = []
    for i, entry in enumerate(entries):
        try:
            records.append(
                TemperatureRecord(
                    year=entry["year"],
                    month=entry["month"],
                    variance=entry["variance"],
                    temperature=base + entry["variance"],
                )
            )
        except (KeyError, TypeError) as exc:
            raise DatasetError(f"malformed monthlyVariance[{i}]: {entry!r}") from exc

    return Dataset(base_temperature=base, records=tuple(records))


async def load_dataset(client: DatasetClient) -> Dataset | None:
    """Fetch and parse the dataset. Returns None (and logs) on any failure."""
    try:
        payload = await client.fetch()
        dataset = parse_dataset(payload)
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.error("Dataset fetch failed: %s", exc)
        return None
    except (json.JSONDecodeError, UnicodeDecodeError, DatasetError) as exc:
        logger.error("Dataset payload invalid: %s", exc)
        return None

    min_year, max_year = dataset.year_extent
    min_temp, max_temp = dataset.temperature_extent
    logger.info(
        "Loaded %d records (%d-%d), base %.2f°C, range %.3f..%.3f°C",
        len(dataset), min_year, max_year,
        dataset.base_temperature, min_temp, max_temp,
    )
    return dataset
