#!/usr/bin/env python3
"""
pbsim - Pinboard Decimal Machine Simulator CLI

Usage:
    python pbsim.py <program.pb> [--input N ...] [--acc N] [--switch E=3 ...]
                                 [--profile standard] [--max-steps N]
                                 [--trace] [--dump-memory] [-v] [--log-file F]

Program format: one instruction per line, '[n]' starts pinboard n,
'.' is an unwired position, '#' starts a comment.

Keyboard input comes from --input values in order; when they run out
and stdin is a terminal, the operator is prompted.

Exit codes:
    0  machine halted
    1  alarm, or the program did not load
    2  internal error
    3  waiting for keyboard input, none available
    4  step limit reached

Examples:
    python pbsim.py sum.pb --input 12 --input 30
    python pbsim.py loop.pb --switch E=2 --trace -v
"""

import argparse
import logging
import sys

from pinboard_emulator import __version__
from pinboard_emulator.config import DEFAULT_MAX_STEPS, DEFAULT_PROFILE, MACHINE_PROFILES
from pinboard_emulator.cpu.regs import CONTROL_REGISTERS
from pinboard_emulator.cpu.decoder import UnsupportedOperand
from pinboard_emulator.cpu.words import OutOfRange, Word12
from pinboard_emulator.emu import PinboardEmulator, StopReason
from pinboard_emulator.loader import LoadError, load_file
from pinboard_emulator.log_setup import setup_logging
from pinboard_emulator.periph.printer import PrinterPeripheral, format_event

EXIT_HALT = 0
EXIT_ALARM = 1
EXIT_INTERNAL = 2
EXIT_KEYBOARD = 3
EXIT_TIMEOUT = 4


def parse_switch(value: str):
    """Parse 'E=3' into ('E', 3)."""
    name, sep, number = value.partition("=")
    name = name.strip().upper()
    if not sep or name not in CONTROL_REGISTERS:
        raise argparse.ArgumentTypeError(
            f"expected one of {'/'.join(CONTROL_REGISTERS)}=<0-15>, got {value!r}")
    try:
        return name, int(number)
    except ValueError:
        raise argparse.ArgumentTypeError(f"switch value must be an integer: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pbsim",
        description="Pinboard decimal machine simulator",
        epilog="Profiles: " + ", ".join(MACHINE_PROFILES.keys()),
    )
    parser.add_argument("program", help="Program file (pinboard wiring)")
    parser.add_argument("--profile", default=DEFAULT_PROFILE,
                        choices=list(MACHINE_PROFILES.keys()),
                        help=f"Machine profile (default: {DEFAULT_PROFILE})")
    parser.add_argument("--input", "-k", dest="inputs", type=int, action="append", default=[],
                        metavar="N", help="Queue a keyboard input value (repeatable)")
    parser.add_argument("--acc", type=int, default=None,
                        help="Initial accumulator value")
    parser.add_argument("--switch", "-s", dest="switches", type=parse_switch,
                        action="append", default=[], metavar="R=N",
                        help="Set control register E/F/X/Y (repeatable)")
    parser.add_argument("--start", type=int, default=1,
                        help="Pinboard slot to start in (default: 1)")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS,
                        help=f"Stop after this many steps (default: {DEFAULT_MAX_STEPS})")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction trace to stderr when stopped")
    parser.add_argument("--dump-memory", action="store_true",
                        help="Print non-zero memory rows when stopped")
    parser.add_argument("--no-prompt", action="store_true",
                        help="Never prompt for keyboard input")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log status changes (-v) or every step (-vv)")
    parser.add_argument("--log-file", default=None,
                        help="Write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"pbsim {__version__}")
    return parser


def _console_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _prompt(emu: PinboardEmulator):
    """Ask the operator for a number until one fits a Word12."""
    while True:
        try:
            text = input(f"[{emu.location()}] K? ")
        except EOFError:
            return None
        try:
            value = int(text.strip())
            Word12(value)
            return value
        except (ValueError, OutOfRange) as e:
            print(f"  not a 12-digit number: {e}", file=sys.stderr)


def run_program(emu: PinboardEmulator, max_steps: int, prompt: bool) -> StopReason:
    remaining = max_steps
    while True:
        before = emu.steps
        reason = emu.run(max_steps=remaining)
        remaining -= emu.steps - before
        if reason is not StopReason.KEYBOARD or not prompt:
            return reason
        value = _prompt(emu)
        if value is None:
            return reason
        emu.supply_input(value)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log = setup_logging("pinboard_emulator",
                        console_level=_console_level(args.verbose),
                        log_file=args.log_file)

    try:
        profile = MACHINE_PROFILES[args.profile]
        boards = load_file(args.program, capacity=profile["positions"])
    except FileNotFoundError:
        print(f"Error: File not found: {args.program}", file=sys.stderr)
        return EXIT_ALARM
    except LoadError as e:
        print(f"Load error: {e}", file=sys.stderr)
        return EXIT_ALARM

    printer = PrinterPeripheral(sink=lambda event: print(format_event(event)))
    emu = PinboardEmulator(profile=args.profile, printer=printer)
    emu.enable_trace(args.trace)

    try:
        emu.load_pinboards(boards)
        emu.select_pinboard(args.start)
        for name, value in args.switches:
            emu.set_switch(name, value)
        if args.acc is not None:
            emu.regs.ACC = Word12(args.acc)
        emu.keyboard.inject(*args.inputs)

        prompt = sys.stdin.isatty() and not args.no_prompt
        reason = run_program(emu, args.max_steps, prompt)
    except (ValueError, OutOfRange) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ALARM
    except UnsupportedOperand as e:
        print(f"Decode error at {emu.location()}: {e}", file=sys.stderr)
        return EXIT_ALARM
    except Exception as e:
        log.exception("Internal simulator error")
        print(f"Internal simulator error: {e}", file=sys.stderr)
        return EXIT_INTERNAL

    if args.trace:
        print(emu.get_trace(), file=sys.stderr)
    if args.dump_memory:
        print(emu.mem.dump(nonzero_only=True), file=sys.stderr)

    print(f"[pbsim] {reason.value} after {emu.steps} steps: {emu.display()}", file=sys.stderr)
    if reason is StopReason.ALARM:
        print(f"[pbsim] Alarm: {emu.alarm}", file=sys.stderr)
        return EXIT_ALARM
    if reason is StopReason.KEYBOARD:
        return EXIT_KEYBOARD
    if reason is StopReason.TIMEOUT:
        return EXIT_TIMEOUT
    return EXIT_HALT


if __name__ == "__main__":
    sys.exit(main())
