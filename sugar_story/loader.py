# loader.py
# Fetch the beverage table, clean it into records, retry on transient failures

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import pandas as pd

from sugar_story import config
from sugar_story.records import BeverageRecord, Dataset, clean_category
from sugar_story.state import AppState
from sugar_story.surface import NarrativeText

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[pd.DataFrame]]


class DataLoadError(Exception):
    pass


async def read_source(source: str) -> pd.DataFrame:
    """CSV by default; Excel workbooks by extension (needs openpyxl)."""
    path = str(source)
    reader = pd.read_excel if path.lower().endswith((".xlsx", ".xls")) else pd.read_csv
    return await asyncio.to_thread(reader, source)


def _text(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.strip()


def parse_frame(df: pd.DataFrame) -> Dataset:
    missing = [c for c in config.REQUIRED_COLUMNS if c not in df.columns]
    sugar_cols = [c for c in config.SUGAR_COLUMNS if c in df.columns]
    if not sugar_cols:
        missing.append(config.SUGAR_COLUMNS[0])
    if missing:
        raise DataLoadError(f"Missing required columns: {missing}")

    calories = pd.to_numeric(df["Calories"], errors="coerce").fillna(0)
    # first sugar column with a value wins, then 0
    sugar = pd.to_numeric(df[sugar_cols[0]], errors="coerce")
    for col in sugar_cols[1:]:
        sugar = sugar.fillna(pd.to_numeric(df[col], errors="coerce"))
    sugar = sugar.fillna(0)

    raw_category = df["Beverage_category"]
    keep = (calories > 0) & (sugar >= 0)

    records = tuple(
        BeverageRecord(
            beverage=beverage,
            category=category if isinstance(category, str) else "",
            clean_category=clean_category(category),
            prep=prep,
            calories=float(cal),
            sugar=float(grams),
        )
        for beverage, category, prep, cal, grams in zip(
            _text(df["Beverage"])[keep], raw_category[keep], _text(df["Beverage_prep"])[keep],
            calories[keep], sugar[keep],
        )
    )
    logger.debug("Parsed %d rows, dropped %d invalid", len(df), len(df) - len(records))
    return records


class DataLoader:
    def __init__(self, state: AppState, narrative: NarrativeText,
                 source: str = config.DATA_SOURCE,
                 fetch: Optional[Fetcher] = None,
                 retries: int = config.LOAD_RETRIES,
                 retry_delay: float = config.RETRY_DELAY_SECONDS,
                 on_loaded: Optional[Callable[[], None]] = None):
        self.state = state
        self.narrative = narrative
        self.source = source
        self.fetch = fetch or read_source
        self.retries = retries
        self.retry_delay = retry_delay
        self.on_loaded = on_loaded

    async def load(self) -> Optional[Dataset]:
        """Commit the dataset and fire on_loaded; None once every attempt has failed."""
        for attempt in range(self.retries + 1):
            try:
                frame = await self.fetch(self.source)
                dataset = parse_frame(frame)
            except Exception as e:
                # any fetch or parse failure counts as transient
                logger.error(f"Error loading data: {e!r}")
                if attempt < self.retries:
                    logger.warning(f"Retrying data load... attempt {attempt + 1}")
                    await asyncio.sleep(self.retry_delay)
                    continue
                self.narrative.update(config.LOAD_ERROR_MESSAGE)
                return None

            self.state.dataset = dataset
            logger.info(f"Data loaded: {len(dataset)} items")
            if self.on_loaded is not None:
                self.on_loaded()
            return dataset
        return None
