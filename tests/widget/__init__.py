"""
UI scenarios for the settings screen.

Each scenario mounts the settings app against a theme provider and a mocked
preference store, taps theme options through the Textual pilot and checks
state, rebuilds and persistence.
"""
