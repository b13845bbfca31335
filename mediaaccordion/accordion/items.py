# mediaaccordion/accordion/items.py
import os
import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..utils.schemas import (
    PAGE_SCHEMA, ACCORDION_SCHEMA, DEFAULT_ANIMATION_DURATION_MS, LAYOUT_DEFAULT
)
from ..utils.json_validator import validate_json, describe_validation_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """One title + duration + media unit of an accordion. Read-only."""
    title: str
    duration_ms: int = DEFAULT_ANIMATION_DURATION_MS
    media_url: Optional[str] = None
    media_type: Optional[str] = None

    @property
    def is_video(self) -> bool:
        return bool(self.media_type) and self.media_type.startswith("video/")

    @property
    def has_media(self) -> bool:
        return bool(self.media_url)


@dataclass(frozen=True)
class AccordionDefinition:
    items: Tuple[Item, ...] = field(default_factory=tuple)
    autoplay: bool = True
    layout: str = LAYOUT_DEFAULT


def parse_item(item_data) -> Item:
    return Item(
        title=item_data.get("title", ""),
        duration_ms=int(item_data.get("duration", DEFAULT_ANIMATION_DURATION_MS)),
        media_url=item_data.get("media_url"),
        media_type=item_data.get("media_type"),
    )


def parse_accordion_definition(data, description="Accordion definition") -> AccordionDefinition:
    """
    Builds an AccordionDefinition from already-decoded JSON data.

    Raises:
        ValueError: If the data does not match ACCORDION_SCHEMA.
    """
    is_valid, error = validate_json(data, ACCORDION_SCHEMA, description)
    if not is_valid:
        raise ValueError(f"{description} has invalid format: {describe_validation_error(error)}")

    return AccordionDefinition(
        items=tuple(parse_item(item_data) for item_data in data.get("items", [])),
        autoplay=data.get("autoplay", True),
        layout=data.get("layout", LAYOUT_DEFAULT),
    )


def parse_page_definition(data, description="Page definition"):
    """Returns the page title and its list of AccordionDefinition objects."""
    is_valid, error = validate_json(data, PAGE_SCHEMA, description)
    if not is_valid:
        raise ValueError(f"{description} has invalid format: {describe_validation_error(error)}")

    definitions = [
        parse_accordion_definition(accordion_data, f"{description} accordion #{index}")
        for index, accordion_data in enumerate(data["accordions"])
    ]
    return data.get("title", ""), definitions


def load_page_definition(file_path):
    """
    Loads a page definition JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be read, is not valid JSON or fails
            schema validation.
    """
    logger.info(f"Loading page definition: {file_path}")
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Page definition file not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse page definition: {file_path}\n{e}")
        raise ValueError(f"Page definition is not valid JSON: {e}") from e
    except OSError as e:
        logger.error(f"Failed to read page definition: {file_path}\n{e}")
        raise ValueError(f"Page definition could not be read: {e}") from e

    title, definitions = parse_page_definition(data, f"Page '{os.path.basename(file_path)}'")
    logger.info(f"Loaded {len(definitions)} accordion(s) from {file_path}")
    return title, definitions


def sample_page_definition():
    """A built-in page used when no definition file is configured."""
    return "Media Accordion", [
        AccordionDefinition(items=(
            Item("Plan", 3000),
            Item("Build", 5000),
            Item("Ship", 2000),
        )),
        AccordionDefinition(items=(
            Item("Hover me", 4000),
            Item("Or me", 4000),
        ), autoplay=False, layout="layout-2"),
    ]
