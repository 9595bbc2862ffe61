# scraper_autoconfig/config_runtime_profiles.py
"""
Generate profiles:
Named presets for the config generation run.
Used by run_generate.py to construct GenerateConfig.
"""

GENERATE_PROFILES = {
    "default": {
        "min_occurrences": 20,
        "distinct_values": True,
        "labeler": {"type": "basic"},
        "fetcher": {"type": "static"},
    },

    # Short listings (a handful of cards per page)
    "small-list": {
        "min_occurrences": 4,
        "distinct_values": True,
        "labeler": {"type": "basic"},
        "fetcher": {"type": "static"},
    },

    # Add more profiles here...
}
