"""Tests for order issuance and the movement tick."""

from horizon.movement import issue_move, step, tick


class TestIssueMove:
    """Orders are recorded, never executed immediately."""

    def test_sets_target_without_moving(self, make_unit):
        units = [make_unit("a", region=1), make_unit("b", region=2)]
        out = issue_move(units, {"a"}, 3)
        assert out[0].target == 3
        assert out[0].region == 1
        assert out[1].target is None

    def test_unknown_ids_ignored(self, make_unit):
        units = [make_unit("a", region=1)]
        out = issue_move(units, {"ghost"}, 3)
        assert out == units

    def test_multiple_units(self, make_unit):
        units = [make_unit("a"), make_unit("b"), make_unit("c")]
        out = issue_move(units, ["a", "c"], 4)
        assert [u.target for u in out] == [4, None, 4]

    def test_new_order_replaces_old(self, make_unit):
        units = [make_unit("a", target=3)]
        out = issue_move(units, {"a"}, 5)
        assert out[0].target == 5

    def test_input_untouched(self, make_unit):
        units = [make_unit("a")]
        issue_move(units, {"a"}, 3)
        assert units[0].target is None


class TestTick:
    """One hop per unit per tick."""

    def test_idle_units_never_change(self, ring, make_unit):
        units = [make_unit("a", region=1), make_unit("b", region=4)]
        for _ in range(5):
            out, changed = tick(units, ring)
            assert changed is False
            assert out is units

    def test_ring_scenario(self, ring, make_unit):
        units = issue_move([make_unit("a", region=1)], {"a"}, 3)

        units, changed = tick(units, ring)
        assert changed
        assert (units[0].region, units[0].target) == (2, 3)

        units, changed = tick(units, ring)
        assert changed
        assert (units[0].region, units[0].target) == (3, 3)

        units, changed = tick(units, ring)
        assert changed
        assert (units[0].region, units[0].target) == (3, None)

        units, changed = tick(units, ring)
        assert not changed

    def test_converges_in_hop_count_ticks(self, make_graph, make_unit):
        graph = make_graph([(1, 2), (2, 3), (3, 4), (4, 5)])
        units = issue_move([make_unit("a", region=1)], {"a"}, 5)
        for expected in (2, 3, 4, 5):
            units, _ = tick(units, graph)
            assert units[0].region == expected
            assert units[0].target == 5
        units, changed = tick(units, graph)
        assert changed
        assert units[0].region == 5
        assert units[0].target is None

    def test_blocked_order_clears_in_one_tick(self, make_graph, make_unit):
        graph = make_graph([(1, 2)], isolated=[99])
        units = issue_move([make_unit("a", region=1)], {"a"}, 99)
        units, changed = tick(units, graph)
        assert changed
        assert units[0].region == 1
        assert units[0].target is None

    def test_disconnected_components(self, make_graph, make_unit):
        graph = make_graph([(1, 2), (2, 3), (10, 11)])
        units = issue_move([make_unit("a", region=2)], {"a"}, 11)
        units, changed = tick(units, graph)
        assert changed
        assert (units[0].region, units[0].target) == (2, None)

    def test_order_to_current_region_clears(self, ring, make_unit):
        units = issue_move([make_unit("a", region=4)], {"a"}, 4)
        units, changed = tick(units, ring)
        assert changed
        assert (units[0].region, units[0].target) == (4, None)

    def test_redirect_mid_transit(self, make_graph, make_unit):
        graph = make_graph([(1, 2), (2, 3), (2, 4)])
        units = issue_move([make_unit("a", region=1)], {"a"}, 3)
        units, _ = tick(units, graph)
        assert units[0].region == 2

        units = issue_move(units, {"a"}, 4)
        units, _ = tick(units, graph)
        assert (units[0].region, units[0].target) == (4, 4)

    def test_units_move_independently(self, ring, make_unit):
        units = [make_unit("a", region=1), make_unit("b", region=1), make_unit("c", region=3)]
        units = issue_move(units, {"a"}, 3)
        units = issue_move(units, {"b"}, 4)
        units, changed = tick(units, ring)
        assert changed
        assert [u.region for u in units] == [2, 5, 3]
        assert [u.target for u in units] == [3, 4, None]

    def test_changed_only_reports_real_changes(self, ring, make_unit):
        idle = make_unit("a", region=1)
        moving = make_unit("b", region=1, target=2)
        out, changed = tick([idle, moving], ring)
        assert changed
        assert out[0] is idle
        assert out[1].region == 2


class TestStep:

    def test_idle(self, ring, make_unit):
        u = make_unit("a", region=1)
        assert step(u, ring) is u

    def test_is_moving_flag(self, ring, make_unit):
        u = make_unit("a", region=1, target=3)
        assert u.is_moving
        u = step(step(u, ring), ring)
        assert u.region == 3
        assert not u.is_moving
