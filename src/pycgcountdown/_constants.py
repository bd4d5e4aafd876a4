"""Internal constants shared across the library."""

# Exact prefix the host uses for XML template data.
TEMPLATE_DATA_MARKER = "<templateData>"
COMPONENT_DATA_TAG = "componentData"
DATA_TAG = "data"

DEFAULT_DURATION = "3:00"
DEFAULT_INTERVAL_MS = 1000
DEFAULT_PREVIEW_DELAY = 0.5

# ------------------------------------------------------------------
# Canonical payload keys, in order of preference.
# ``f0``/``f1`` are the positional field ids the host UI sends.
# ------------------------------------------------------------------

DURATION_KEYS: tuple[str, ...] = ("f0", "time")
HIDE_ON_COMPLETE_KEYS: tuple[str, ...] = ("f1", "hideOnEnd")
