"""
Integration tests for the emulator harness.

These tests start local auth and document store emulators and exercise the
harness end to end: initialization, test users, seeding and clearing.
"""
