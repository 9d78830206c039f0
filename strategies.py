from typing import Dict, Iterator, List, Mapping, Optional, Set, Tuple

from bridge_problem import BridgeProblem, BridgeState, Configuration
from search import uniform_cost_search

Path = List[BridgeState]


def solve_bridge_problem(problem: BridgeProblem, cost_bound: Optional[int] = None) -> Tuple[Optional[Path], int]:
    path = uniform_cost_search(problem, cost_bound)
    if not path:
        return None, 0
    return path, path[-1].cost


def find_optimal_path(costs: Optional[Mapping[int, int]] = None, cost_bound: Optional[int] = None) -> Optional[Path]:
    return uniform_cost_search(BridgeProblem(costs, cost_bound))


# ------------------------------------------------------------------ Exhaustive enumeration
def enumerate_solutions(problem: BridgeProblem, cost_bound: Optional[int] = None) -> Iterator[Path]:
    """Depth-first walk over every crossing sequence that reaches the goal within the bound.

    A sequence never revisits a configuration; with positive crossing times a
    cycle can only make a solution more expensive.
    """
    if cost_bound is None:
        cost_bound = problem.cost_bound

    initial_state = problem.get_initial_state()
    on_path: Set[Configuration] = {initial_state.configuration}
    stack: List[Tuple[BridgeState, Iterator[BridgeState]]] = []

    if problem.is_goal(initial_state):
        yield [initial_state]
        return
    stack.append((initial_state, problem.get_successors(initial_state, cost_bound)))

    while stack:
        state, successors = stack[-1]
        next_state = next(successors, None)
        if next_state is None:
            stack.pop()
            on_path.discard(state.configuration)
            continue
        if next_state.configuration in on_path:
            continue
        if problem.is_goal(next_state):
            yield [s for s, _ in stack] + [next_state]
            continue
        on_path.add(next_state.configuration)
        stack.append((next_state, problem.get_successors(next_state, cost_bound)))


def minimum_cost(problem: BridgeProblem, cost_bound: Optional[int] = None) -> Optional[int]:
    return min((path[-1].cost for path in enumerate_solutions(problem, cost_bound)), default=None)


def alternative_solutions(
    problem: BridgeProblem,
    cost_bound: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Path]:
    """All cheapest solutions, ordered by their crossing descriptions."""
    best: Dict[Tuple[str, ...], Path] = {}
    best_cost: Optional[int] = None
    for path in enumerate_solutions(problem, cost_bound):
        cost = path[-1].cost
        if best_cost is None or cost < best_cost:
            best_cost = cost
            best = {}
        if cost == best_cost:
            best[tuple(s.action for s in path[1:])] = path
    ordered = [best[key] for key in sorted(best)]
    return ordered if limit is None else ordered[:limit]


# ------------------------------------------------------------------ Reporting
def format_step(index: int, state: BridgeState) -> List[str]:
    header = "Initial State:" if index == 0 else f"Step {index}: {state.action}"
    return [header, f"  {state.describe()}"]


def format_solution(path: Path) -> List[str]:
    lines: List[str] = []
    for i, state in enumerate(path):
        lines.extend(format_step(i, state))
    lines.append(f"Total: {path[-1].cost} min")
    return lines


def format_moves(path: Path) -> str:
    return " -> ".join(state.action for state in path[1:]) or "(no crossings)"
