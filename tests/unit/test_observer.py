"""
Unit tests for observer module.
"""
import numpy as np
import pytest

from nmsimplex.core import Vertex
from nmsimplex.observer import (
    CallbackObserver,
    CompositeObserver,
    HistoryObserver,
    Observer,
    PrintObserver,
)
from nmsimplex.optimizer import Optimizer, Status


def make_vertex(coords, value) -> Vertex:
    return Vertex(coordinates=np.array(coords, dtype=float), value=float(value))


class TestObserverBase:
    """Tests for the Observer interface."""

    def test_abstract(self) -> None:
        with pytest.raises(TypeError):
            Observer()

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValueError, match="Interval"):
            HistoryObserver(interval=0)

    def test_names(self) -> None:
        assert PrintObserver(interval=5).get_name() == "PrintObserver(interval=5)"
        assert HistoryObserver().get_name() == "HistoryObserver(interval=1)"


class TestHistoryObserver:
    """Tests for HistoryObserver."""

    def test_records_vertices(self) -> None:
        history = HistoryObserver()
        history.observe(make_vertex([1.0, 2.0], 5.0), None, Status.FILLING, 1)
        history.observe(make_vertex([0.0, 1.0], 1.0), 2.5, Status.EXPANSION, 2)

        assert history.steps == [1, 2]
        assert history.values == [5.0, 1.0]
        assert history.norms == [None, 2.5]
        assert history.statuses == [Status.FILLING, Status.EXPANSION]
        np.testing.assert_array_equal(history.points[1], [0.0, 1.0])

    def test_best_value(self) -> None:
        history = HistoryObserver()
        assert history.get_best_value() is None
        for value in (3.0, 1.0, 2.0):
            history.observe(make_vertex([0.0], value), None, Status.FILLING, 1)
        assert history.get_best_value() == 1.0

    def test_records_whole_run(self) -> None:
        history = HistoryObserver()
        opt = Optimizer(dimension=3, tolerance=1e-5, observers=[history])
        opt.start_points = [[10, 37], [7, 2], [51, 32]]
        result = opt.run(lambda p: p[0] ** 2 + p[1] ** 2)

        assert history.values == result.value_history
        assert history.steps == list(range(1, len(history.values) + 1))
        assert history.statuses[:3] == [Status.FILLING] * 3
        assert history.norms[-1] == result.final_norm


class TestCallbackObserver:
    """Tests for CallbackObserver."""

    def test_forwards_arguments(self) -> None:
        calls = []
        observer = CallbackObserver(lambda *args: calls.append(args))
        observer.observe(make_vertex([1.0, 2.0], 5.0), 0.5, Status.REFLECTING, 4)

        assert len(calls) == 1
        coords, value, norm, status = calls[0]
        np.testing.assert_array_equal(coords, [1.0, 2.0])
        assert value == 5.0
        assert norm == 0.5
        assert status is Status.REFLECTING

    def test_name_uses_callback(self) -> None:
        def on_vertex(*args):
            pass

        assert "on_vertex" in CallbackObserver(on_vertex).get_name()


class TestCompositeObserver:
    """Tests for CompositeObserver interval handling."""

    def test_respects_intervals(self) -> None:
        every = HistoryObserver()
        third = HistoryObserver(interval=3)
        composite = CompositeObserver([every, third])

        for step in range(1, 8):
            composite.observe(make_vertex([0.0], step), None, Status.FILLING, step)

        assert every.steps == [1, 2, 3, 4, 5, 6, 7]
        assert third.steps == [3, 6]

    def test_finalize_delegates(self) -> None:
        finalized = []

        class Recorder(HistoryObserver):
            def finalize(self) -> None:
                finalized.append(self)

        first, second = Recorder(), Recorder()
        CompositeObserver([first, second]).finalize()
        assert finalized == [first, second]

    def test_name(self) -> None:
        composite = CompositeObserver([PrintObserver(), HistoryObserver(interval=2)])
        assert composite.get_name() == (
            "Composite[PrintObserver(interval=1), HistoryObserver(interval=2)]"
        )


class TestPrintObserver:
    """Tests for PrintObserver output."""

    def test_filling_line(self, capsys) -> None:
        PrintObserver().observe(make_vertex([7.0, 2.0], 53.0), None, Status.FILLING, 2)
        out = capsys.readouterr().out
        assert out == (
            "New point at: [    7.000,    2.000] ->  53.00000 ||      n/a|| (filling)\n"
        )

    def test_line_with_norm(self, capsys) -> None:
        PrintObserver().observe(
            make_vertex([-34.0, 7.0], 1205.0), 12.5, Status.REFLECTING, 4
        )
        out = capsys.readouterr().out
        assert "[  -34.000,    7.000]" in out
        assert "|| 12.50000||" in out
        assert out.rstrip().endswith("(reflecting)")
