"""Mock implementations for testing and development."""

from .keys import ScriptedKeySource
from .source import MockSampleSource, ScriptedSampleSource

__all__ = ["MockSampleSource", "ScriptedKeySource", "ScriptedSampleSource"]
