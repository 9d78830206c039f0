# main.py
# The main entry point for the bridge crossing solver.

import sys
import os

from bridge_problem import BridgeProblem
from strategies import alternative_solutions, format_moves, format_solution, solve_bridge_problem

DEFAULT_SCENARIO = "bridge_default.txt"
USAGE = "Usage: python main.py [scenario_file] [--limit N] [--all] [--gui]"


def parse_args(argv):
    options = {"scenario": None, "limit": None, "all": False, "gui": False}
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--all":
            options["all"] = True
        elif arg == "--gui":
            options["gui"] = True
        elif arg == "--limit":
            if not args:
                raise ValueError("--limit needs a number of minutes.")
            try:
                options["limit"] = int(args.pop(0))
            except ValueError:
                raise ValueError("--limit needs a whole number of minutes.") from None
        elif arg.startswith("-"):
            raise ValueError(f"Unknown option '{arg}'.")
        elif options["scenario"] is None:
            options["scenario"] = arg
        else:
            raise ValueError(f"Unexpected argument '{arg}'.")
    return options


def resolve_scenario_file(scenario):
    # A command-line scenario wins; otherwise use (or create) the default one.
    if scenario is not None:
        print(f"Using scenario file from command line: '{scenario}'")
        return scenario
    if not os.path.exists(DEFAULT_SCENARIO):
        print(f"No scenario file provided or found. Creating default scenario '{DEFAULT_SCENARIO}'.")
        with open(DEFAULT_SCENARIO, "w") as f:
            f.write("# person minutes\n")
            f.write("\n".join(BridgeProblem().to_lines()) + "\n")
    return DEFAULT_SCENARIO


def print_report(problem, show_all=False):
    costs = ", ".join(f"P{agent}={problem.costs[agent]}min" for agent in problem.agents)
    print("=== BRIDGE CROSSING SOLUTION ===\n")
    print(f"Problem: {len(problem.agents)} people must cross the bridge in {problem.cost_bound} minutes.")
    print(f"Crossing times: {costs}")
    print(f"Bridge capacity: {problem.MAX_GROUP_SIZE} people max")
    print("Torch required for crossing\n")

    path, cost = solve_bridge_problem(problem)
    if path is None:
        print(f"No solution within {problem.cost_bound} minutes!")
        return False

    print(f"\nOPTIMAL SOLUTION FOUND! ({cost} minutes)\n")
    print("\n".join(format_solution(path)))

    if show_all:
        print("\n=== ALTERNATIVE SOLUTIONS ===")
        for i, alternative in enumerate(alternative_solutions(problem), start=1):
            print(f"Solution {i} ({alternative[-1].cost} minutes): {format_moves(alternative)}")
    return True


def main(argv=None):
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
        scenario_file = resolve_scenario_file(options["scenario"])
        problem = BridgeProblem.from_file(scenario_file)
        if options["limit"] is not None:
            problem = BridgeProblem(problem.costs, options["limit"])
    except FileNotFoundError as e:
        print(f"Error: The scenario file '{e.filename}' was not found.")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    if options["gui"]:
        from game import BridgeGame

        try:
            game_instance = BridgeGame(problem)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        game_instance.run()
        return 0

    print_report(problem, show_all=options["all"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
