#!/usr/bin/env python3
"""
Configuration Validation Tool
Checks the MongoDB Atlas settings the quiz API needs before startup.
"""
import os
import sys

from dotenv import load_dotenv

PLACEHOLDER_INDICATORS = ['your_', 'change-this', 'example', 'here', 'changeme']

# (name, required, sensitive)
MONGO_CONFIGS = [
    ("MONGO_USER", True, False),
    ("MONGO_PASSWORD", True, True),
    ("MONGO_CLUSTER", True, False),
    ("MONGO_HOST_SUFFIX", False, False),
    ("MONGO_DB", True, False),
    ("MONGO_COLLECTION", True, False),
]

APP_CONFIGS = [
    ("FLASK_ENV", False, False),
    ("LOG_LEVEL", False, False),
    ("PORT", False, False),
]


def check_env_var(name, required=True, sensitive=False):
    """Check if an environment variable is set and valid."""
    value = os.getenv(name, '')

    if not value:
        status = "❌ MISSING" if required else "⚠️  OPTIONAL (not set)"
        return False, status, ""

    if any(indicator in value.lower() for indicator in PLACEHOLDER_INDICATORS):
        return False, "❌ PLACEHOLDER", value if not sensitive else "***"

    display_value = value if not sensitive else f"{value[:3]}..." if len(value) > 6 else "***"
    return True, "✅ SET", display_value


def check_section(title, configs):
    """Print one block of settings; return False if a required one is not usable."""
    print(f"\n{title}")
    print("-" * 70)
    section_ok = True
    for name, required, sensitive in configs:
        ok, status, value = check_env_var(name, required, sensitive)
        print(f"{name:30s} {status:20s} {value}")
        if required and not ok:
            section_ok = False
    return section_ok


def main():
    load_dotenv()

    print("=" * 70)
    print("Front-End Quiz API Configuration Check")
    print("=" * 70)

    all_ok = check_section("🗄️  MONGODB ATLAS", MONGO_CONFIGS)
    check_section("📋 APPLICATION", APP_CONFIGS)

    # Summary
    print("\n" + "=" * 70)
    if all_ok:
        print("✅ All required configurations are set!")
        return 0
    else:
        print("❌ Some required configurations are missing or invalid!")
        return 1


if __name__ == '__main__':
    sys.exit(main())
