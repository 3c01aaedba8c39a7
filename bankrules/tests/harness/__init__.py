"""Tests for the specification suite and mutation runner."""
