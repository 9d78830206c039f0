from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

AgentId = int


@dataclass(frozen=True)
class Configuration:
    """Who stands on which bank and where the torch is. Used as the visited-set key."""

    left: FrozenSet[AgentId]
    right: FrozenSet[AgentId]
    torch_left: bool


@dataclass(frozen=True, eq=False)
class BridgeState:
    configuration: Configuration
    cost: int
    costs: Mapping[AgentId, int] = field(repr=False)
    parent: Optional["BridgeState"] = field(default=None, repr=False)
    action: str = "Start"

    @property
    def left(self) -> FrozenSet[AgentId]:
        return self.configuration.left

    @property
    def right(self) -> FrozenSet[AgentId]:
        return self.configuration.right

    @property
    def torch_left(self) -> bool:
        return self.configuration.torch_left

    def is_goal(self) -> bool:
        return not self.left and len(self.right) == len(self.costs)

    def generate_successors(self, cost_bound: int) -> Iterator[BridgeState]:
        """Yield every state one crossing away whose total cost stays within cost_bound."""
        current_side = self.left if self.torch_left else self.right
        people = sorted(current_side)

        groups = [(p,) for p in people] + list(combinations(people, 2))
        for group in groups:
            if self.cost + self.crossing_time(group) > cost_bound:
                continue
            yield self.cross(group)

    def crossing_time(self, group: Tuple[AgentId, ...]) -> int:
        # Pairs walk at the slower person's pace.
        return max(self.costs[p] for p in group)

    def cross(self, group: Tuple[AgentId, ...]) -> BridgeState:
        """Move ``group`` (one or two people on the torch side) across with the torch."""
        crossing_time = self.crossing_time(group)
        if len(group) == 1:
            action = f"Person {group[0]} crosses ({crossing_time} min)"
        else:
            action = f"Persons {group[0]} & {group[1]} cross ({crossing_time} min)"
        moved = frozenset(group)
        if self.torch_left:
            left, right = self.left - moved, self.right | moved
        else:
            left, right = self.left | moved, self.right - moved
        return BridgeState(
            configuration=Configuration(left=left, right=right, torch_left=not self.torch_left),
            cost=self.cost + crossing_time,
            costs=self.costs,
            parent=self,
            action=action,
        )

    def describe(self) -> str:
        return "Left: {} | Right: {} | Torch: {} | Time: {} min".format(
            sorted(self.left),
            sorted(self.right),
            "Left" if self.torch_left else "Right",
            self.cost,
        )

    def __str__(self) -> str:
        return self.describe()


class BridgeProblem:
    """Bridge crossing domain: everyone crosses, at most two at a time, always with the torch."""

    DEFAULT_COSTS: Dict[AgentId, int] = {1: 1, 2: 2, 3: 5, 4: 10}
    DEFAULT_COST_BOUND = 17
    MAX_GROUP_SIZE = 2

    def __init__(self, costs: Optional[Mapping[AgentId, int]] = None, cost_bound: Optional[int] = None) -> None:
        if costs is None:
            costs = self.DEFAULT_COSTS
        if cost_bound is None:
            cost_bound = self.DEFAULT_COST_BOUND
        self._validate(costs, cost_bound)
        self.costs: Mapping[AgentId, int] = MappingProxyType(dict(costs))
        self.cost_bound = cost_bound
        self.agents: Tuple[AgentId, ...] = tuple(sorted(self.costs))

    @staticmethod
    def _validate(costs: Mapping[AgentId, int], cost_bound: int) -> None:
        for agent, cost in costs.items():
            if not isinstance(agent, int) or isinstance(agent, bool) or agent <= 0:
                raise ValueError(f"Agent ids must be positive integers, got {agent!r}.")
            if not isinstance(cost, int) or isinstance(cost, bool) or cost <= 0:
                raise ValueError(f"Crossing time for person {agent} must be a positive integer, got {cost!r}.")
        if not isinstance(cost_bound, int) or isinstance(cost_bound, bool):
            raise ValueError(f"Time limit must be an integer, got {cost_bound!r}.")

    # ------------------------------------------------------------------ Scenario files
    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> BridgeProblem:
        """Parse a scenario: ``limit <minutes>`` plus one ``<person> <minutes>`` line per person."""
        costs: Dict[AgentId, int] = {}
        cost_bound: Optional[int] = None

        for lineno, raw in enumerate(lines, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != 2:
                raise ValueError(f"Line {lineno}: expected two fields, got {raw.strip()!r}.")
            key, value = parts
            try:
                number = int(value)
            except ValueError:
                raise ValueError(f"Line {lineno}: {value!r} is not an integer.") from None

            if key.lower() == "limit":
                if cost_bound is not None:
                    raise ValueError(f"Line {lineno}: time limit given twice.")
                cost_bound = number
                continue

            try:
                agent = int(key)
            except ValueError:
                raise ValueError(f"Line {lineno}: {key!r} is not a person id.") from None
            if agent in costs:
                raise ValueError(f"Line {lineno}: person {agent} listed twice.")
            if agent <= 0 or number <= 0:
                raise ValueError(f"Line {lineno}: person ids and crossing times must be positive.")
            costs[agent] = number

        return cls(costs, cost_bound)

    @classmethod
    def from_file(cls, filename: str) -> BridgeProblem:
        with open(filename, "r") as f:
            return cls.from_lines(f)

    def to_lines(self) -> List[str]:
        return [f"limit {self.cost_bound}"] + [f"{agent} {self.costs[agent]}" for agent in self.agents]

    # ------------------------------------------------------------------ API
    def get_initial_state(self) -> BridgeState:
        return BridgeState(
            configuration=Configuration(left=frozenset(self.agents), right=frozenset(), torch_left=True),
            cost=0,
            costs=self.costs,
        )

    def is_goal(self, state: BridgeState) -> bool:
        return state.is_goal()

    def get_successors(self, state: BridgeState, cost_bound: Optional[int] = None) -> Iterator[BridgeState]:
        if cost_bound is None:
            cost_bound = self.cost_bound
        return state.generate_successors(cost_bound)

    def apply_move(self, state: BridgeState, group: Sequence[AgentId]) -> BridgeState:
        """Cross with an explicit group. Used for manual play; the bound is not enforced here."""
        members = frozenset(group)
        if not members or len(members) > self.MAX_GROUP_SIZE or len(members) != len(group):
            raise ValueError(f"A crossing needs one or two distinct people, got {list(group)}.")
        torch_side = state.left if state.torch_left else state.right
        if not members <= torch_side:
            raise ValueError(f"People {sorted(members - torch_side)} are not on the torch side.")

        return state.cross(tuple(sorted(members)))
