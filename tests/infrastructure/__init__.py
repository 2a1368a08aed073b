"""Test infrastructure - fakes for discovery, udev queries and enumeration.

This package contains test support code, NOT actual tests.
"""
