"""Test doubles for code built on plugin_kit."""

from plugin_kit.testkit.fakes import LookupCall, RecordingConfiguration

__all__ = ["LookupCall", "RecordingConfiguration"]
