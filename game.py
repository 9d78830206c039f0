import pygame
import threading

from asset_manager import AssetManager
from bridge_problem import BridgeProblem
from strategies import solve_bridge_problem


class BridgeGame:
    WINDOW_W = 720
    WINDOW_H = 420
    BANK_W = 200
    SPRITE_SIZE = 36
    # People are picked with the digit keys 1-9 in manual mode.
    MAX_AGENT_ID = 9

    def __init__(self, problem: BridgeProblem, assets_dir: str = "assets"):
        if problem.agents and problem.agents[-1] > self.MAX_AGENT_ID:
            raise ValueError(
                f"The viewer selects people with keys 1-{self.MAX_AGENT_ID}; "
                f"person {problem.agents[-1]} cannot be controlled."
            )
        self.problem = problem

        pygame.init()
        self.screen = pygame.display.set_mode((self.WINDOW_W, self.WINDOW_H))
        pygame.display.set_caption(f"Bridge Crossing ({problem.cost_bound} min, torch required)")
        self.font = pygame.font.Font(None, 24)
        self.assets = AssetManager(assets_dir, self.SPRITE_SIZE)

        self.reset_game()

    # ------------------------------------------------------------------ Game loop
    def reset_game(self):
        self.game_state = "MENU"
        self.current_state = self.problem.get_initial_state()
        self.selected: set[int] = set()
        self.solution_path = []
        self.solution_cost = 0
        self.animation_delay = 900
        self.last_move_time = 0
        # Async search state
        self._search_thread = None
        self._searching = False
        self._search_done = False
        self._search_result = None  # tuple[list[BridgeState] | None, int] | None

    def run(self):
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._handle_input(event)
            self._update()
            self._draw()
            pygame.display.flip()
            clock.tick(30)
        pygame.quit()

    def _handle_input(self, event):
        if event.type != pygame.KEYDOWN:
            return
        if self.game_state == "MENU":
            if event.key == pygame.K_m:
                self.game_state = "MANUAL"
            elif event.key == pygame.K_a:
                self.game_state = "AUTO_SEARCH"
        elif self.game_state == "MANUAL":
            if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._cross_selected()
            elif event.key == pygame.K_BACKSPACE:
                self.reset_game()
                self.game_state = "MANUAL"
            elif pygame.K_1 <= event.key <= pygame.K_9:
                self._toggle(event.key - pygame.K_0)

    def _toggle(self, agent: int):
        torch_side = self.current_state.left if self.current_state.torch_left else self.current_state.right
        if agent not in torch_side:
            return
        if agent in self.selected:
            self.selected.discard(agent)
        elif len(self.selected) < self.problem.MAX_GROUP_SIZE:
            self.selected.add(agent)

    def _cross_selected(self) -> bool:
        try:
            next_state = self.problem.apply_move(self.current_state, sorted(self.selected))
        except ValueError as e:
            print(f"Invalid crossing: {e}")
            return False
        self.current_state = next_state
        self.selected.clear()
        print(f"{next_state.action} -> {next_state.describe()}")

        if next_state.cost > self.problem.cost_bound:
            print("Out of time! The torch burned out.")
            self.reset_game()
            return False
        if self.problem.is_goal(next_state):
            print(f"You Win! Everyone crossed in {next_state.cost} min.")
            self.reset_game()
        return True

    # ------------------------------------------------------------------ Update
    def _update(self):
        if self.game_state == "AUTO_SEARCH":
            # Non-blocking: run the solver in a background thread and keep the UI responsive
            if not self._searching:
                print("Finding optimal crossing plan (async)...")
                self._searching = True
                self._search_done = False
                self._search_result = None

                def _worker():
                    self._search_result = solve_bridge_problem(self.problem)
                    self._search_done = True

                self._search_thread = threading.Thread(target=_worker, daemon=True)
                self._search_thread.start()
            elif self._search_done:
                path, cost = self._search_result
                if path:
                    # Replay from the search's own start so parent links line up.
                    self.current_state = path[0]
                    self.solution_path = list(path[1:])
                    self.solution_cost = cost
                    actions = [s.action for s in path[1:]]
                    print(f"\n--- SOLUTION FOUND ---\nTotal time: {cost} min\nCrossings: {actions}")
                    self.game_state = "AUTO_ANIMATE"
                    self.last_move_time = pygame.time.get_ticks()
                else:
                    print(f"No solution within {self.problem.cost_bound} minutes!")
                    self.game_state = "MENU"
                self._searching = False
                self._search_thread = None
        elif self.game_state == "AUTO_ANIMATE":
            current_time = pygame.time.get_ticks()
            if current_time - self.last_move_time > self.animation_delay:
                self.last_move_time = current_time
                if self.solution_path:
                    next_state = self.solution_path.pop(0)
                    if next_state.parent is not self.current_state:
                        print(f"Animation desynced on '{next_state.action}'. Resetting.")
                        self.reset_game()
                        return
                    self.current_state = next_state
                    print(f"{next_state.action} -> {next_state.describe()}")
                else:
                    print("Animation finished.")
                    self.reset_game()

    # ------------------------------------------------------------------ Rendering
    def _bank_positions(self, agents, left: bool):
        x = self.BANK_W // 2 if left else self.WINDOW_W - self.BANK_W // 2
        gap = self.SPRITE_SIZE + 16
        top = 90
        return {agent: (x, top + i * gap) for i, agent in enumerate(sorted(agents))}

    def _draw(self):
        self.screen.fill((10, 20, 40))
        banks = (
            pygame.Rect(0, 0, self.BANK_W, self.WINDOW_H),
            pygame.Rect(self.WINDOW_W - self.BANK_W, 0, self.BANK_W, self.WINDOW_H),
        )
        river = pygame.Rect(self.BANK_W, 0, self.WINDOW_W - 2 * self.BANK_W, self.WINDOW_H)
        self._fill_area(banks[0], "bank", (40, 70, 30))
        self._fill_area(banks[1], "bank", (40, 70, 30))
        self._fill_area(river, "river", (20, 60, 140))
        bridge = pygame.Rect(self.BANK_W, self.WINDOW_H // 2 - 12, river.width, 24)
        bridge_img = self.assets.get_tile("bridge")
        if bridge_img:
            for x in range(bridge.left, bridge.right, self.SPRITE_SIZE):
                self.screen.blit(bridge_img, (x, bridge.top))
        else:
            pygame.draw.rect(self.screen, (120, 80, 40), bridge)

        positions = {}
        positions.update(self._bank_positions(self.current_state.left, left=True))
        positions.update(self._bank_positions(self.current_state.right, left=False))
        for agent, center in positions.items():
            image = self.assets.get_agent(agent)
            rect = pygame.Rect(0, 0, self.SPRITE_SIZE, self.SPRITE_SIZE)
            rect.center = center
            if image:
                self.screen.blit(image, rect)
            else:
                color = (255, 215, 0) if agent in self.selected else (230, 230, 230)
                pygame.draw.circle(self.screen, color, center, self.SPRITE_SIZE // 2)
            if agent in self.selected:
                pygame.draw.rect(self.screen, (255, 215, 0), rect, 2)
            self._draw_text(f"{agent}: {self.problem.costs[agent]}m", (center[0], center[1] + self.SPRITE_SIZE // 2 + 8),
                            color=(180, 180, 180))

        torch_x = self.BANK_W - 30 if self.current_state.torch_left else self.WINDOW_W - self.BANK_W + 30
        torch_center = (torch_x, self.WINDOW_H // 2 - 40)
        torch_img = self.assets.get_torch(pygame.time.get_ticks())
        if torch_img:
            self.screen.blit(torch_img, torch_img.get_rect(center=torch_center))
        else:
            pygame.draw.circle(self.screen, (255, 140, 0), torch_center, 10)

        center_x = self.WINDOW_W / 2
        limit = self.problem.cost_bound
        if self.game_state == "MENU":
            self._draw_text("Press 'M' for Manual or 'A' for Auto Search", (center_x, self.WINDOW_H - 40))
        elif self.game_state == "MANUAL":
            self._draw_text(
                f"Manual | Time: {self.current_state.cost}/{limit} min | 1-9 select, Enter cross, Backspace reset",
                (center_x, 20),
            )
        elif self.game_state == "AUTO_SEARCH":
            dots = "." * (1 + (pygame.time.get_ticks() // 500) % 3)
            self._draw_text(f"Finding optimal plan{dots}", (center_x, self.WINDOW_H - 40))
        elif self.game_state == "AUTO_ANIMATE":
            self._draw_text(
                f"Auto | Time: {self.current_state.cost}/{self.solution_cost} min | {self.current_state.action}",
                (center_x, 20),
            )

    def _fill_area(self, rect, tile_name, color):
        tile = self.assets.get_tile(tile_name)
        if not tile:
            pygame.draw.rect(self.screen, color, rect)
            return
        for y in range(rect.top, rect.bottom, self.SPRITE_SIZE):
            for x in range(rect.left, rect.right, self.SPRITE_SIZE):
                self.screen.blit(tile, (x, y))

    def _draw_text(self, text, position, color=(255, 255, 255)):
        text_surface = self.font.render(text, True, color)
        self.screen.blit(text_surface, text_surface.get_rect(center=position))
