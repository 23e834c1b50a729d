"""Unit tests for isolated functions and classes."""
