"""
Unit tests for FitTrack components.

This package contains unit tests that test individual components in isolation.
Unit tests should be fast, deterministic, and test single units of functionality
without running emulators.
"""
