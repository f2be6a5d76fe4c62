"""
Test support for the FitTrack application.

This package wires integration tests to local emulators of the auth service
and the document store, and seeds fixture data into them.

Classes:
    EmulatorHarness: Emulator wiring and data seeding helpers
    LocalEmulators: Handle on in-process emulator servers
"""

from .emulator import BaselineSeeds, EmulatorHarness, ProgramSeed, get_harness
from .local_emulators import LocalEmulators, start_local_emulators

__all__ = [
    "EmulatorHarness",
    "ProgramSeed",
    "BaselineSeeds",
    "get_harness",
    "LocalEmulators",
    "start_local_emulators",
]
