"""Tests for the Pingu SDK."""
