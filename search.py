# search.py
# Uniform-cost search over bridge crossing states. Each configuration keeps the
# cheapest cost it has been pushed with; a successor is pushed again only when
# it reaches that configuration strictly cheaper, and stale entries are skipped.

import heapq
import time
from math import inf


def reconstruct_path(state):
    path = []
    node = state
    while node is not None:
        path.append(node)
        node = node.parent
    path.reverse()
    return path


def uniform_cost_search(problem, cost_bound=None):
    if cost_bound is None:
        cost_bound = problem.cost_bound
    print(f"Starting uniform-cost search (limit {cost_bound} min)...")
    start_time = time.time()

    initial_state = problem.get_initial_state()

    frontier = []
    tie_breaker = 0
    heapq.heappush(frontier, (initial_state.cost, tie_breaker, initial_state))

    best_known = {initial_state.configuration: initial_state.cost}
    expanded = 0

    best_path = None
    best_cost = inf

    while frontier:
        _, _, current = heapq.heappop(frontier)

        if current.cost > best_known[current.configuration]:
            continue

        if problem.is_goal(current):
            if current.cost < best_cost:
                best_cost = current.cost
                best_path = reconstruct_path(current)
            # Arrival ends the scenario; goal states are never expanded.
            continue

        expanded += 1
        for next_state in problem.get_successors(current, cost_bound):
            if next_state.cost >= best_known.get(next_state.configuration, inf):
                continue
            best_known[next_state.configuration] = next_state.cost
            tie_breaker += 1
            heapq.heappush(frontier, (next_state.cost, tie_breaker, next_state))

    end_time = time.time()
    print(f"Search finished in {end_time - start_time:.4f} seconds.")
    print(f"Configurations discovered: {len(best_known)}, expanded: {expanded}")
    if best_path is None:
        print("No solution found.")
    else:
        print(f"Solution found: {best_cost} min in {len(best_path) - 1} crossings.")
    return best_path
