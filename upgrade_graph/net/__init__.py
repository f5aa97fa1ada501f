"""Outbound request pacing."""
