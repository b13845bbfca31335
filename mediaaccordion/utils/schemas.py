# mediaaccordion/utils/schemas.py

"""
Defines the JSON schemas used for validation in the application,
together with the defaults the accordion falls back to.
"""

# Playback defaults
DEFAULT_ANIMATION_DURATION_MS = 5000  # used when an item declares no usable duration
DEFAULT_RESIZE_DEBOUNCE_MS = 500
DEFAULT_SLIDER_SPACING = 20
DEFAULT_SWIPE_THRESHOLD = 40  # pixels of horizontal drag before a swipe counts
DEFAULT_VISIBILITY_THRESHOLD = 0.1
DEFAULT_VISIBILITY_POLL_MS = 100

LAYOUT_DEFAULT = "layout-1"
LAYOUT_HOVER = "layout-2"  # hover over an item header activates it

ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "duration": {
            "type": "integer",
            "minimum": 0,
            "default": DEFAULT_ANIMATION_DURATION_MS
        },
        "media_url": {"type": ["string", "null"], "default": None},
        "media_type": {
            "type": ["string", "null"],
            "pattern": "^(image|video)/[A-Za-z0-9.+-]+$",
            "default": None
        }
    },
    "required": ["title"],
    "additionalProperties": False
}

ACCORDION_SCHEMA = {
    "type": "object",
    "properties": {
        "autoplay": {"type": "boolean", "default": True},
        "layout": {
            "type": "string",
            "enum": [LAYOUT_DEFAULT, LAYOUT_HOVER],
            "default": LAYOUT_DEFAULT
        },
        "items": {
            "type": "array",
            "items": ITEM_SCHEMA,
            "default": []
        }
    },
    "required": ["items"],
    "additionalProperties": False
}

PAGE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "accordions": {
            "type": "array",
            "items": ACCORDION_SCHEMA
        }
    },
    "required": ["accordions"],
    "additionalProperties": False
}

SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "page_definition_path": {
            "type": ["string", "null"]
        },
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            "default": "INFO"
        },
        "log_to_file": {
            "type": "boolean",
            "default": False
        },
        "log_file_path": {
            "type": "string",
            "default": "mediaaccordion.log"
        },
        "default_duration_ms": {"type": "integer", "minimum": 0},
        "resize_debounce_ms": {"type": "integer", "minimum": 0},
        "slider_spacing": {"type": "integer", "minimum": 0},
        "visibility_threshold": {"type": "number", "minimum": 0, "maximum": 1},
        "visibility_poll_ms": {"type": "integer", "minimum": 10}
    },
    "additionalProperties": True
}
