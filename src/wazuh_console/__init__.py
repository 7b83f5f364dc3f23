"""Operator console for the Wazuh security platform."""

__version__ = "0.1.0"
