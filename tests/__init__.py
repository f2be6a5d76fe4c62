"""
Test package for the FitTrack test support code.

Test Organization:
    unit/: Unit tests for models, the document store and the theme service
    integration/: Emulator harness tests against local emulators
    widget/: Theme switching scenarios driven through the Textual pilot
    conftest.py: Pytest configuration and shared fixtures
"""
