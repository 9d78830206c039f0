"""Tests for the uniform-cost search engine."""

import pytest

from bridge_problem import BridgeProblem
from search import reconstruct_path, uniform_cost_search
from strategies import find_optimal_path, minimum_cost


def group_sizes(path):
    return [len(prev.left ^ state.left) for prev, state in zip(path, path[1:])]


class TestReferenceScenario:

    def test_optimal_path(self):
        path = find_optimal_path({1: 1, 2: 2, 3: 5, 4: 10}, 17)

        assert path is not None
        assert path[0].parent is None
        assert path[0].cost == 0
        assert path[-1].is_goal()
        assert path[-1].cost == 17
        assert len(path) == 6
        assert group_sizes(path) == [2, 1, 2, 1, 2]

    def test_path_is_linked_and_increasing(self):
        path = uniform_cost_search(BridgeProblem())

        for prev, state in zip(path, path[1:]):
            assert state.parent is prev
            assert state.cost > prev.cost
            assert state.torch_left != prev.torch_left
        assert [s.cost for s in path] in (
            [0, 2, 3, 13, 15, 17],
            [0, 2, 4, 14, 15, 17],
        )

    def test_no_solution_below_seventeen(self):
        assert find_optimal_path({1: 1, 2: 2, 3: 5, 4: 10}, 16) is None

    def test_explicit_bound_overrides_problem(self):
        problem = BridgeProblem({1: 1, 2: 2, 3: 5, 4: 10}, 16)

        assert uniform_cost_search(problem) is None
        assert uniform_cost_search(problem, 17)[-1].cost == 17

    def test_loose_bound_still_optimal(self):
        path = find_optimal_path({1: 1, 2: 2, 3: 5, 4: 10}, 1000)

        assert path[-1].cost == 17

    @pytest.mark.parametrize("bound", [17, 18, 19, 20, 22, 1000])
    def test_cost_independent_of_bound(self, bound):
        # A loose bound lets expensive routes reach a configuration first.
        problem = BridgeProblem({1: 1, 2: 2, 3: 5, 4: 10}, bound)

        assert uniform_cost_search(problem)[-1].cost == 17
        assert minimum_cost(problem) == 17


class TestEdgeCases:

    @pytest.mark.parametrize("bound", [0, -1, -100])
    def test_non_positive_bound(self, bound):
        assert find_optimal_path({1: 1, 2: 2, 3: 5, 4: 10}, bound) is None

    def test_bound_below_cheapest_move(self):
        assert find_optimal_path({1: 3, 2: 4}, 2) is None

    @pytest.mark.parametrize("bound", [0, 5, -1])
    def test_zero_agents_is_immediate_goal(self, bound):
        path = find_optimal_path({}, bound)

        assert path is not None
        assert len(path) == 1
        assert path[0].is_goal()
        assert path[0].cost == 0

    def test_single_agent(self):
        path = find_optimal_path({1: 7}, 7)

        assert len(path) == 2
        assert path[1].action == "Person 1 crosses (7 min)"
        assert path[1].cost == 7
        assert find_optimal_path({1: 7}, 6) is None

    def test_two_agents_cross_together(self):
        path = find_optimal_path({1: 4, 2: 9}, 20)

        assert len(path) == 2
        assert path[-1].cost == 9

    def test_three_agents(self):
        path = find_optimal_path({1: 1, 2: 2, 3: 5}, 20)

        assert path[-1].cost == 8
        assert len(path) == 4


class TestOptimality:

    @pytest.mark.parametrize("costs, bound", [
        ({1: 1, 2: 2, 3: 5, 4: 10}, 17),
        ({1: 1, 2: 2, 3: 5, 4: 10}, 22),
        ({1: 1, 2: 5, 3: 6}, 20),
        ({1: 2, 2: 3, 3: 4, 4: 5}, 25),
        ({1: 1, 2: 8, 3: 9, 4: 10}, 30),
        ({1: 3, 2: 3}, 3),
        ({1: 1, 2: 1, 3: 1, 4: 1, 5: 1}, 7),
    ])
    def test_matches_exhaustive_enumeration(self, costs, bound):
        problem = BridgeProblem(costs, bound)

        path = uniform_cost_search(problem)
        expected = minimum_cost(problem)

        assert expected is not None
        assert path[-1].cost == expected

    @pytest.mark.parametrize("costs, bound", [
        ({1: 1, 2: 2, 3: 5, 4: 10}, 16),
        ({1: 1, 2: 5, 3: 6}, 11),
        ({1: 1, 2: 1, 3: 1, 4: 1, 5: 1}, 6),
    ])
    def test_no_solution_agrees_with_enumeration(self, costs, bound):
        problem = BridgeProblem(costs, bound)

        assert uniform_cost_search(problem) is None
        assert minimum_cost(problem) is None


def test_reconstruct_path():
    problem = BridgeProblem()
    start = problem.get_initial_state()
    over = problem.apply_move(start, [1, 2])
    back = problem.apply_move(over, [1])

    assert reconstruct_path(back) == [start, over, back]
    assert reconstruct_path(start) == [start]
