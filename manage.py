#!/usr/bin/env python
"""
Command line entry point for the SIMRS backend.

Points Django at ``simrs.settings`` and hands off to the management
utility (``runserver``, ``migrate``, ``seed_reference_data`` ...).
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the SIMRS project."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'simrs.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed and available on your "
            "PYTHONPATH? Did you forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
