import os
from typing import Optional, Sequence

import cv2
import numpy as np

from waterpouring.main.pouring_solver.solver.models import State, Move, replay


class SolutionVisualizer:
    """Visualizes a solution as a grid of panels, one panel per step."""

    PANELS_PER_ROW = 6
    GLASS_WIDTH = 46
    GLASS_GAP = 18
    MAX_GLASS_HEIGHT = 150
    MIN_GLASS_HEIGHT = 12
    PANEL_MARGIN = 20
    CAPTION_HEIGHT = 30
    LABEL_HEIGHT = 28

    WATER_COLOR = (200, 130, 40)  # BGR
    OUTLINE_COLOR = (40, 40, 40)
    TEXT_COLOR = (0, 0, 0)

    def __init__(self, output_dir: str = 'waterpouring/static/output'):
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

    def visualize_solution(self, initial: State, moves: Sequence[Move], name: str) -> str:
        """Render a solution and write it as PNG. Returns the file name."""
        img = self.render_solution(initial, moves)
        filename = f"solution_{name}.png"
        cv2.imwrite(os.path.join(self.output_dir, filename), img)
        return filename

    def render_solution(self, initial: State, moves: Sequence[Move]) -> np.ndarray:
        """Render the start state and the state after every move."""
        states = replay(initial, moves)
        captions = ["Start"] + [f"{step}. {move}" for step, move in enumerate(moves, start=1)]
        max_capacity = max(initial.capacities(), default=0)

        panels = [self._draw_panel(state, caption, max_capacity)
                  for state, caption in zip(states, captions)]

        rows = []
        for start in range(0, len(panels), self.PANELS_PER_ROW):
            row = panels[start:start + self.PANELS_PER_ROW]
            # Pad the last row so every row has the same width
            while len(row) < self.PANELS_PER_ROW and len(panels) > self.PANELS_PER_ROW:
                row.append(self._blank_panel(panels[0].shape))
            rows.append(np.hstack(row))

        return np.vstack(rows)

    def panel_size(self, n_glasses: int) -> tuple:
        """(height, width) of one panel for a state with n_glasses."""
        width = 2 * self.PANEL_MARGIN + n_glasses * self.GLASS_WIDTH + max(n_glasses - 1, 0) * self.GLASS_GAP
        height = self.CAPTION_HEIGHT + self.MAX_GLASS_HEIGHT + self.LABEL_HEIGHT + 2 * self.PANEL_MARGIN
        return height, max(width, 160)

    def _blank_panel(self, shape) -> np.ndarray:
        return np.ones(shape, dtype=np.uint8) * 255

    def _draw_panel(self, state: State, caption: str, max_capacity: int) -> np.ndarray:
        height, width = self.panel_size(len(state))
        img = np.ones((height, width, 3), dtype=np.uint8) * 255

        cv2.putText(img, caption, (10, self.CAPTION_HEIGHT - 8),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, self.TEXT_COLOR, 1, cv2.LINE_AA)

        base_y = self.CAPTION_HEIGHT + self.PANEL_MARGIN + self.MAX_GLASS_HEIGHT
        content_width = len(state) * self.GLASS_WIDTH + max(len(state) - 1, 0) * self.GLASS_GAP
        left = (width - content_width) // 2

        for index, glass in enumerate(state):
            x = left + index * (self.GLASS_WIDTH + self.GLASS_GAP)
            glass_height = self._glass_height(glass.capacity, max_capacity)
            top_y = base_y - glass_height

            if glass.capacity > 0 and glass.current > 0:
                level = int(round(glass_height * glass.current / glass.capacity))
                cv2.rectangle(img, (x, base_y - level), (x + self.GLASS_WIDTH, base_y),
                              self.WATER_COLOR, -1)

            cv2.rectangle(img, (x, top_y), (x + self.GLASS_WIDTH, base_y), self.OUTLINE_COLOR, 2)

            label = str(glass)
            text_size = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, 0.45, 1)[0]
            text_x = x + (self.GLASS_WIDTH - text_size[0]) // 2
            cv2.putText(img, label, (text_x, base_y + 20),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.45, self.TEXT_COLOR, 1, cv2.LINE_AA)

        cv2.putText(img, f"Total: {state.total_volume()}", (10, height - 8),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.35, (100, 100, 100), 1, cv2.LINE_AA)
        cv2.rectangle(img, (0, 0), (width - 1, height - 1), (210, 210, 210), 1)

        return img

    def _glass_height(self, capacity: int, max_capacity: Optional[int]) -> int:
        """Glass outline height, proportional to capacity."""
        if not max_capacity:
            return self.MIN_GLASS_HEIGHT
        scaled = int(round(self.MAX_GLASS_HEIGHT * capacity / max_capacity))
        return max(scaled, self.MIN_GLASS_HEIGHT)
