#!/usr/bin/env python3
"""
Configuration for SID Filter
Handles environment variables and defaults for new Filter instances
"""

import os
from typing import Any, Dict


def get_config() -> Dict[str, Any]:
    """Get parsed configuration values"""
    config = {
        # Chip
        'chip_model': os.environ.get('SIDFILTER_CHIP_MODEL', '6581'),
        'filter_enabled': os.environ.get('SIDFILTER_FILTER_ENABLED', '1') == '1',

        # Debug
        'verbose': os.environ.get('SIDFILTER_VERBOSE', '0') == '1',
    }

    return config


def is_verbose() -> bool:
    """True when configuration-time diagnostics should be printed"""
    return os.environ.get('SIDFILTER_VERBOSE', '0') == '1'


def print_config():
    """Print current configuration"""
    config = get_config()

    print("\n" + "="*60)
    print("SID FILTER - CONFIGURATION")
    print("="*60)

    sections = {
        'Chip': ['chip_model', 'filter_enabled'],
        'Debug': ['verbose'],
    }

    for section, keys in sections.items():
        print(f"\n{section}:")
        for key in keys:
            if key in config:
                print(f"  {key}: {config[key]}")

    print("\n" + "="*60 + "\n")


if __name__ == "__main__":
    print_config()
