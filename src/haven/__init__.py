"""
HAVEN - Companion Conversation Safety Core

This package classifies conversational turns for crisis risk and
decides which kind of reply the companion should give.

IMPORTANT: This is a safety-critical component for a vulnerable
user population. A missed self-harm signal is far worse than a
false alarm, and detection must keep working when analysis fails.
"""

__version__ = "0.1.0"
__author__ = "Haven Engineering Team"
