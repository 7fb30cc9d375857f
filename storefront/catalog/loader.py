"""Load catalog records from a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any, Union

import aiofiles
from pydantic import ValidationError

from .models import ProductCreate

logger = logging.getLogger(__name__)


def parse_catalog(records: list[dict[str, Any]]) -> list[ProductCreate]:
    """
    Validate raw catalog records.

    Records that fail validation (for example a non-numeric price) are
    logged and skipped so one bad row does not take down the catalog.
    """
    products = []
    for index, record in enumerate(records):
        try:
            products.append(ProductCreate.model_validate(record))
        except ValidationError as e:
            name = record.get("name", "?") if isinstance(record, dict) else "?"
            logger.warning(
                "Skipping catalog record %d (%s): %d validation error(s): %s",
                index, name, e.error_count(), e.errors()[0]["msg"],
            )
    return products


async def load_catalog(path: Union[str, Path]) -> list[ProductCreate]:
    """
    Read a catalog file.

    The file holds either a list of product records or an object with a
    ``products`` list.
    """
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        data = json.loads(await f.read())

    records = data.get("products", []) if isinstance(data, dict) else data
    products = parse_catalog(records)
    logger.info("Loaded %d/%d catalog records from %s", len(products), len(records), path)
    return products
