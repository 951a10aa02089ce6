"""
Version constants for the document analysis service.
"""

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
SANITIZER_VERSION = "sanitize-1.0.0"
TEMPLATE_CATALOG_VERSION = "templates-1.0.0"
PROMPT_VERSION = "prompts-1.0.0"
SIGNALS_VERSION = "signals-1.0.0"

PIPELINE_VERSION = "+".join(
    [SANITIZER_VERSION, TEMPLATE_CATALOG_VERSION, PROMPT_VERSION, SIGNALS_VERSION]
)
