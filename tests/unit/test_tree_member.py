"""Tests for TreeMember measurement and termination."""

from __future__ import annotations

from proctime.exceptions import ProcessVanishedError
from proctime.process_times import ProcessTimes, RawProcessTimes
from proctime.tree_member import TreeMember
from tests.helpers.process_fakes import FakeProcess, raw_times


class TestConstruction:
    def test_captures_identity(self) -> None:
        member = TreeMember(FakeProcess(42, "worker"))

        assert member.pid == 42
        assert member.name == "worker"
        assert member.times == ProcessTimes.ZERO
        assert member.has_measurement is False

    def test_name_captured_once(self) -> None:
        process = FakeProcess(42, "worker")
        member = TreeMember(process)
        process._name = "renamed"

        assert member.name == "worker"


class TestMeasure:
    def test_successful_measurement(self) -> None:
        member = TreeMember(FakeProcess(1, times=raw_times(wall=100, user=40, kernel=10)))

        assert member.measure() is True
        assert member.times == ProcessTimes.from_ticks(100, 40, 10)
        assert member.has_measurement is True

    def test_failure_keeps_previous_measurement(self) -> None:
        process = FakeProcess(1, times=raw_times(wall=100, user=40, kernel=10))
        member = TreeMember(process)
        member.measure()

        process.times = None  # exited and no longer queryable

        assert member.measure() is False
        assert member.times == ProcessTimes.from_ticks(100, 40, 10)

    def test_failure_without_previous_measurement_leaves_zero(self) -> None:
        member = TreeMember(FakeProcess(1, times=None))

        assert member.measure() is False
        assert member.times == ProcessTimes.ZERO
        assert member.has_measurement is False

    def test_invalid_span_counts_as_failure(self) -> None:
        process = FakeProcess(1, times=RawProcessTimes(creation_time=10, exit_time=5, kernel_time=0, user_time=0))
        member = TreeMember(process)

        assert member.measure() is False

    def test_remeasure_overwrites(self) -> None:
        process = FakeProcess(1, times=raw_times(wall=10))
        member = TreeMember(process)
        member.measure()
        process.times = raw_times(wall=20)

        member.measure()

        assert member.times.wall_time.ticks == 20


class TestTerminate:
    def test_kills_running_process(self) -> None:
        process = FakeProcess(1)
        member = TreeMember(process)

        member.terminate()

        assert process.kill_calls == 1
        assert process.running is False

    def test_noop_when_already_exited(self) -> None:
        process = FakeProcess(1, running=False)

        TreeMember(process).terminate()

        assert process.kill_calls == 0

    def test_idempotent(self) -> None:
        process = FakeProcess(1)
        member = TreeMember(process)

        member.terminate()
        member.terminate()

        assert process.kill_calls == 1

    def test_tolerates_race_with_exit(self) -> None:
        process = FakeProcess(1)
        process.kill_error = ProcessVanishedError(pid=1)

        TreeMember(process).terminate()

        assert process.kill_calls == 1

    def test_tolerates_access_denied(self, caplog) -> None:
        process = FakeProcess(1, "locked")
        process.kill_error = PermissionError("denied")

        TreeMember(process).terminate()

        assert "Access denied while terminating locked" in caplog.text
