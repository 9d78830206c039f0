import os
import glob

import pygame
from PIL import Image, ImageSequence


class AssetManager:
    """Loads optional sprites from an 'assets' directory.

    Missing images come back as None and callers fall back to built-in drawing.
    """

    def __init__(self, assets_dir: str, sprite_size: int) -> None:
        self.assets_dir = assets_dir
        self.sprite_size = sprite_size

        self.tiles = {}
        for name in ("bank", "bridge", "river"):
            self.tiles[name] = self._load_image_optional(f"{name}.png")

        self.agent_images = {}

        # Torch flicker: numbered frames, or a GIF with its own frame durations.
        self.torch_frames = self._load_sequence_optional("torch_*.png")
        self.torch_durations = None  # type: list[int] | None
        gif_frames = self._load_gif_optional("torch.gif")
        if gif_frames is not None and gif_frames[0]:
            self.torch_frames, self.torch_durations = gif_frames

    # ------------------------------------------------------------------ API
    def get_tile(self, name: str):
        return self.tiles.get(name)

    def get_agent(self, agent: int):
        if agent not in self.agent_images:
            self.agent_images[agent] = self._load_image_optional(f"agent_{agent}.png")
        return self.agent_images[agent]

    def get_torch(self, tick_ms: int):
        frames = self.torch_frames
        if not frames:
            return None
        if self.torch_durations:
            total = sum(max(1, d) for d in self.torch_durations)
            t = tick_ms % total
            acc = 0
            idx = 0
            for i, d in enumerate(self.torch_durations):
                acc += max(1, d)
                if t < acc:
                    idx = i
                    break
            return frames[idx % len(frames)]
        # ~8 fps
        idx = (tick_ms // 120) % len(frames)
        return frames[idx]

    # ------------------------------------------------------------------ Internals
    def _scale(self, img):
        return pygame.transform.smoothscale(img, (self.sprite_size, self.sprite_size))

    def _load_image_optional(self, filename: str):
        path = os.path.join(self.assets_dir, filename)
        if not os.path.exists(path):
            return None
        try:
            return self._scale(pygame.image.load(path).convert_alpha())
        except pygame.error as e:
            print(f"Skipping unreadable asset '{path}': {e}")
            return None

    def _load_sequence_optional(self, pattern: str):
        images = []
        for path in sorted(glob.glob(os.path.join(self.assets_dir, pattern))):
            try:
                images.append(self._scale(pygame.image.load(path).convert_alpha()))
            except pygame.error as e:
                print(f"Skipping unreadable asset '{path}': {e}")
        return images

    def _load_gif_optional(self, filename: str):
        """Load an animated GIF into (frames, per-frame durations), or None if the file is missing."""
        path = os.path.join(self.assets_dir, filename)
        if not os.path.exists(path):
            return None
        try:
            im = Image.open(path)
            frames = []
            durations = []
            for frame in ImageSequence.Iterator(im):
                durations.append(int(frame.info.get("duration", 100)))
                fr = frame.convert("RGBA").resize((self.sprite_size, self.sprite_size), Image.Resampling.LANCZOS)
                surf = pygame.image.fromstring(fr.tobytes(), fr.size, fr.mode).convert_alpha()
                frames.append(surf)
            return frames, durations
        except (OSError, pygame.error) as e:
            print(f"Skipping unreadable asset '{path}': {e}")
            return None
