"""
Pinboard Emulator - Machine Profiles

Named machine configurations, selected with --profile on the command
line or PinboardEmulator(profile=...). Each profile fixes how many
pinboard slots the machine has, how many positions a pinboard carries
and which predicate the C (conditional transfer) opcode tests.

Conditions (see emu.CONDITIONS):
  negative           accumulator < 0
  zero               accumulator == 0
  nonzero            accumulator != 0
  secondary_nonzero  secondary accumulator != 0
"""

from typing import Any, Dict

DEFAULT_PROFILE = "standard"
DEFAULT_MAX_STEPS = 100_000

MACHINE_PROFILES: Dict[str, Dict[str, Any]] = {
    "standard": {
        "pinboard_slots": 8,
        "positions": 16,
        "condition": "negative",
        "description": "8 pinboards x 16 positions, C tests accumulator < 0",
    },
    "zero-test": {
        "pinboard_slots": 8,
        "positions": 16,
        "condition": "zero",
        "description": "Standard machine with C testing accumulator == 0",
    },
    "long-board": {
        "pinboard_slots": 8,
        "positions": 100,
        "condition": "negative",
        "description": "100-position pinboards (transfers reach positions 0-15)",
    },
}


def get_profile(name: str) -> Dict[str, Any]:
    try:
        return MACHINE_PROFILES[name]
    except KeyError:
        raise KeyError(
            f"Unknown machine profile {name!r}; known: {', '.join(MACHINE_PROFILES)}"
        ) from None
