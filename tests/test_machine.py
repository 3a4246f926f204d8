# tests/test_machine.py
"""
chip8_tracer.machineモジュール(制御ループ)の単体テスト。
Presenter/InputSource/時計を差し替え、1反復ごとの振る舞いを検証します。
"""
import logging

import pytest

from chip8_tracer.common.errors import IllegalOpcode
from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.loader.loader import FontLoader
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType
from chip8_tracer.machine import Chip8Machine, InputEvent, InputEventKind, InputSource, Presenter

# @intent:test_suite 入力→実行→タイマー→提示の1反復と、デバッグモードの振る舞いを検証します。

class RecordingPresenter(Presenter):
    def __init__(self):
        self.frames = []

    def present(self, framebuffer):
        self.frames.append(framebuffer)

class ScriptedInput(InputSource):
    def __init__(self):
        self.pending = []

    def poll(self):
        events = self.pending
        self.pending = []
        return events

class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

def make_machine(program, debug=False, dump_path="memdump.dmp"):
    memory = Memory()
    FontLoader().load_font(None, memory)
    memory.load(0x200, bytes(program))
    cpu = Chip8Cpu(memory)
    presenter = RecordingPresenter()
    source = ScriptedInput()
    clock = FakeClock()
    machine = Chip8Machine(cpu, presenter, source, debugger=Debugger(cpu), debug=debug,
                           timer_hz=60, dump_path=dump_path, clock=clock)
    return machine, presenter, source, clock

# LD V0, #05 ; ADD V0, #01 ; JP #204
LOOP = [0x60, 0x05, 0x70, 0x01, 0x12, 0x04]
# LD V0, #00 ; LD F, V0 ; DRW V0, V0, 5 ; JP #206
DRAW = [0x60, 0x00, 0xF0, 0x29, 0xD0, 0x05, 0x12, 0x06]

class TestChip8Machine:
    def test_iterate_executes_one_instruction(self):
        machine, _, _, _ = make_machine(LOOP)
        assert machine.iterate() is True
        assert machine.cpu.get_state().pc == 0x202
        assert machine.cpu.registers.read_reg(0) == 0x05

    def test_quit_stops_before_executing(self):
        machine, _, source, _ = make_machine(LOOP)
        source.pending.append(InputEvent(InputEventKind.QUIT))
        assert machine.iterate() is False
        assert machine.running is False
        assert machine.cpu.get_state().pc == 0x200

    def test_key_events_reach_keypad(self):
        machine, _, source, _ = make_machine(LOOP)
        source.pending.append(InputEvent(InputEventKind.KEY, 0xC, True))
        machine.iterate()
        assert machine.cpu.keypad.is_down(0xC)
        source.pending.append(InputEvent(InputEventKind.KEY, 0xC, False))
        machine.iterate()
        assert not machine.cpu.keypad.is_down(0xC)

    # @intent:test_case_timer_rate タイマーは命令数ではなく経過時間(1/60秒)で減算されることを検証します。
    def test_timers_follow_clock(self):
        machine, _, _, clock = make_machine(LOOP)
        machine.cpu.registers.delay_timer = 10
        for _ in range(5):
            machine.iterate()
        assert machine.cpu.registers.delay_timer == 10

        clock.now += 1.0 / 60
        machine.iterate()
        assert machine.cpu.registers.delay_timer == 9
        machine.iterate()
        assert machine.cpu.registers.delay_timer == 9

    def test_present_only_when_dirty(self):
        machine, presenter, _, _ = make_machine(DRAW)
        machine.iterate() # LD
        machine.iterate() # LD F
        assert presenter.frames == []
        machine.iterate() # DRW
        assert len(presenter.frames) == 1
        assert presenter.frames[0][0][:4] == (True, True, True, True)
        machine.iterate() # JP
        machine.iterate()
        assert len(presenter.frames) == 1

    def test_dump_event_writes_memory(self, tmp_path):
        path = tmp_path / "memdump.dmp"
        machine, _, source, _ = make_machine(LOOP, dump_path=str(path))
        source.pending.append(InputEvent(InputEventKind.DUMP))
        machine.iterate()
        data = path.read_bytes()
        assert len(data) == 4096
        assert data[0x200:0x206] == bytes(LOOP)

    # @intent:test_case_dump_failure ダンプ先に書き込めなくてもループが継続することを検証します。
    def test_dump_failure_is_logged(self, tmp_path, caplog):
        path = tmp_path / "no_such_dir" / "memdump.dmp"
        machine, _, source, _ = make_machine(LOOP, dump_path=str(path))
        source.pending.append(InputEvent(InputEventKind.DUMP))
        with caplog.at_level(logging.ERROR, logger="chip8_tracer.machine"):
            assert machine.iterate() is True
        assert "Memory dump" in caplog.text
        assert machine.cpu.get_state().pc == 0x202

    def test_debug_mode_waits_for_step(self, capsys):
        machine, _, source, _ = make_machine(LOOP, debug=True)
        machine.iterate()
        machine.iterate()
        assert machine.cpu.get_state().pc == 0x200

        source.pending.append(InputEvent(InputEventKind.STEP))
        machine.iterate()
        assert machine.cpu.get_state().pc == 0x202
        assert "-> 202" in capsys.readouterr().out

        machine.iterate()
        assert machine.cpu.get_state().pc == 0x202

    def test_breakpoint_enters_debug_mode(self, capsys):
        machine, _, _, _ = make_machine(LOOP)
        machine.debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204))
        machine.iterate()
        assert machine.debug is False
        machine.iterate()
        assert machine.debug is True
        assert "CHIP-8 state" in capsys.readouterr().out
        machine.iterate()
        assert machine.cpu.get_state().pc == 0x204

    def test_fatal_error_propagates(self):
        machine, _, _, _ = make_machine([0x01, 0x23])
        with pytest.raises(IllegalOpcode):
            machine.iterate()

    def test_run_until_quit(self):
        machine, _, source, _ = make_machine(LOOP)
        count = {"n": 0}
        queued_poll = source.poll

        def poll():
            count["n"] += 1
            if count["n"] == 10:
                return [InputEvent(InputEventKind.QUIT)]
            return queued_poll()

        source.poll = poll
        machine.run()
        assert machine.running is False
        assert machine.cpu.cycle_count == 9
