"""
Pinboard Emulator - Memory Tests

get(t, o) must succeed for every digit pair 0-9 and fail for anything
else, and every read/write goes through it.
"""

import pytest

from pinboard_emulator.cpu.words import OutOfRange, Word12
from pinboard_emulator.errors import InvalidMemory
from pinboard_emulator.mem.memory import Memory, MemoryCell


class TestAddressing:

    def test_get_total_over_grid(self):
        mem = Memory()
        for t in range(10):
            for o in range(10):
                cell = mem.get(t, o)
                assert isinstance(cell, MemoryCell)
                assert cell.address == (t, o)

    @pytest.mark.parametrize("tens,ones", [
        (10, 0), (0, 10), (15, 15), (-1, 0), (0, -1), (None, 0), (0, None),
    ])
    def test_get_out_of_grid(self, tens, ones):
        with pytest.raises(InvalidMemory) as exc:
            Memory().get(tens, ones)
        assert (exc.value.tens, exc.value.ones) == (tens, ones)

    def test_cells_are_distinct(self):
        mem = Memory()
        mem.write(1, 2, 12)
        assert mem.read(2, 1) == 0
        assert mem.read(1, 2) == 12

    def test_handle_is_live(self):
        mem = Memory()
        cell = mem.get(4, 4)
        cell.write(Word12(99))
        assert mem.read(4, 4) == 99

    def test_read_write_bounds_checked(self):
        mem = Memory()
        with pytest.raises(InvalidMemory):
            mem.write(10, 0, 1)
        with pytest.raises(InvalidMemory):
            mem.read(0, 12)

    def test_write_out_of_range_value(self):
        with pytest.raises(OutOfRange):
            Memory().write(0, 0, 10 ** 12)


class TestWatchpointsAndSnapshots:

    def test_watchpoint_fires_on_write(self):
        mem = Memory()
        seen = []
        mem.add_watchpoint(3, 4, lambda addr, old, new: seen.append((addr, int(old), int(new))))
        mem.write(3, 4, 7)
        mem.write(3, 5, 8)
        assert seen == [((3, 4), 0, 7)]

    def test_remove_watchpoint(self):
        mem = Memory()
        seen = []
        cb = lambda *a: seen.append(a)
        mem.add_watchpoint(0, 0, cb)
        mem.remove_watchpoint(0, 0, cb)
        mem.write(0, 0, 1)
        assert seen == []

    def test_watchpoint_address_checked(self):
        with pytest.raises(InvalidMemory):
            Memory().add_watchpoint(10, 0, lambda *a: None)

    def test_snapshot_diff(self):
        mem = Memory()
        before = mem.snapshot()
        mem.load_words({(0, 1): 5, (9, 9): -3})
        changes = Memory.diff_snapshots(before, mem.snapshot())
        assert changes == {(0, 1): (0, 5), (9, 9): (0, -3)}

    def test_clear(self):
        mem = Memory()
        mem.write(5, 5, 55)
        mem.clear()
        assert all(cell.word == 0 for cell in mem)

    def test_dump_nonzero_rows(self):
        mem = Memory()
        mem.write(2, 0, 42)
        text = mem.dump(nonzero_only=True)
        assert text.startswith("2 | +000000000042")
        assert len(text.splitlines()) == 1
        assert len(mem.dump().splitlines()) == 10
