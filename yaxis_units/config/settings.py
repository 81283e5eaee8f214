# File: yaxis_units/config/settings.py
"""
Configuration settings for the Y-axis unit selector.
"""


class UnitSelectorConfig:
    """Configuration for Y-axis unit inference and selection."""

    # Selector widget settings
    SELECTOR = {
        'placeholder': 'Please select a unit',
        'field_label': 'Y Axis Unit',
        'search_label': 'Search units',
        'none_value': 'none',
        'none_label': 'None',
        'option_separator': ' · '
    }

    # Axis label rendering
    AXIS_LABEL = {
        'default_title': 'Value',
        'annotation_style': 'parentheses'  # parentheses | bracket | suffix
    }

    # Logging settings
    LOGGING = {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': None
    }

    # Runtime base path settings
    BASE_PATH = {
        'runtime_key': 'SIGNOZ_BASE_PATH',
        'build_time_key': 'BASE_PATH',
        'default': '/',
        'runtime_global': '__SIGNOZ_CONFIG__'
    }
