"""Load the marketing data snapshot from JSON."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import DataLoadError
from ..models.campaign import MarketingData

logger = logging.getLogger(__name__)


def load_marketing_data(source: Path | str | Mapping[str, Any]) -> MarketingData:
    """Load a `{"campaigns": [...]}` document into an immutable snapshot.

    Args:
        source: Path to a JSON file, a JSON string, or an already decoded dict

    Returns:
        MarketingData with malformed numbers coerced to 0.

    Raises:
        DataLoadError: If the file is missing, the JSON is invalid, or the
            document's structure cannot be read.
    """
    if isinstance(source, Mapping):
        return parse_marketing_data(source)

    if isinstance(source, Path):
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as e:
            raise DataLoadError(f"Failed to read {source}: {e}") from e
    else:
        text = source

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON: {e}") from e

    if not isinstance(document, Mapping):
        raise DataLoadError(
            f"Expected a JSON object, got {type(document).__name__}"
        )
    return parse_marketing_data(document)


def parse_marketing_data(document: Mapping[str, Any]) -> MarketingData:
    """Validate a decoded document into MarketingData."""
    try:
        data = MarketingData.model_validate(document)
    except ValidationError as e:
        raise DataLoadError("Marketing data could not be read", e.errors()) from e

    logger.debug("Loaded snapshot with %d campaigns", len(data.campaigns))
    return data
