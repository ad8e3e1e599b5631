"""
Configuration management for the Warnsdorff knight's tour.

This module provides a clean interface for loading and validating
configuration from YAML files.
"""

import yaml
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Config:
    """
    Configuration container for tour runs.

    Board dimensions and start square left as None are asked for
    interactively.

    Attributes:
        rows: Number of board rows
        cols: Number of board columns
        start_row: Starting row of the knight (1-indexed)
        start_col: Starting column of the knight (1-indexed)
        min_size: Smallest accepted board dimension
        max_size: Largest accepted board dimension
        show_steps: Whether to print the board after every move
        glyph_current: Cell glyph for the knight's square
        glyph_visited: Cell glyph for visited squares
        glyph_unvisited: Cell glyph for unvisited squares
        mode: Execution mode ('single' or 'sweep')
        sizes: Board sizes (rows, cols) for sweep mode
        verbose: Whether to print run summaries
        show: Whether to show plots
        save: Whether to save plots
        output_dir: Directory to save results
    """

    # Board configuration
    rows: Optional[int] = None
    cols: Optional[int] = None
    start_row: Optional[int] = None
    start_col: Optional[int] = None
    min_size: int = 3
    max_size: int = 10

    # Rendering
    show_steps: bool = True
    glyph_current: str = '[K]'
    glyph_visited: str = '[/]'
    glyph_unvisited: str = '[ ]'

    # Execution configuration
    mode: str = 'single'
    sizes: List[List[int]] = field(default_factory=lambda: [[5, 5]])
    verbose: bool = False

    # Visualization and output
    show: bool = False
    save: bool = False
    output_dir: str = 'results'

    @classmethod
    def from_yaml(cls, path: str) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        # 'size' sets a square board
        size = data.get('size')
        rows = data.get('rows', size)
        cols = data.get('cols', size)

        sizes = data.get('sizes') or [[5, 5]]
        sizes = [[s, s] if isinstance(s, int) else list(s) for s in sizes]

        glyphs = data.get('glyphs') or {}

        return cls(
            rows=rows,
            cols=cols,
            start_row=data.get('start_row'),
            start_col=data.get('start_col'),
            min_size=data.get('min_size', 3),
            max_size=data.get('max_size', 10),
            show_steps=data.get('show_steps', True),
            glyph_current=glyphs.get('current', '[K]'),
            glyph_visited=glyphs.get('visited', '[/]'),
            glyph_unvisited=glyphs.get('unvisited', '[ ]'),
            mode=data.get('mode', 'single'),
            sizes=sizes,
            verbose=data.get('verbose', False),
            show=data.get('show', False),
            save=data.get('save', False),
            output_dir=data.get('output_dir', 'results'),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'rows': self.rows,
            'cols': self.cols,
            'start_row': self.start_row,
            'start_col': self.start_col,
            'min_size': self.min_size,
            'max_size': self.max_size,
            'show_steps': self.show_steps,
            'glyphs': self.glyphs,
            'mode': self.mode,
            'sizes': self.sizes,
            'verbose': self.verbose,
            'show': self.show,
            'save': self.save,
            'output_dir': self.output_dir,
        }

    @property
    def glyphs(self) -> dict:
        return {
            'current': self.glyph_current,
            'visited': self.glyph_visited,
            'unvisited': self.glyph_unvisited,
        }

    @property
    def start(self) -> Optional[tuple]:
        """0-indexed start square, or None if not fully configured."""
        if self.start_row is None or self.start_col is None:
            return None
        return (self.start_row - 1, self.start_col - 1)

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate size range
        if self.min_size < 1:
            errors.append(f"min_size must be positive, got {self.min_size}")
        if self.max_size < self.min_size:
            errors.append(f"max_size ({self.max_size}) must be at least min_size ({self.min_size})")

        # Validate dimensions
        for name, value in (('rows', self.rows), ('cols', self.cols)):
            if value is not None and not (self.min_size <= value <= self.max_size):
                errors.append(f"{name} must be between {self.min_size} and {self.max_size}, got {value}")

        # Validate start square (1-indexed)
        for name, value, limit in (('start_row', self.start_row, self.rows),
                                   ('start_col', self.start_col, self.cols)):
            if value is None:
                continue
            if value < 1:
                errors.append(f"{name} must be at least 1, got {value}")
            elif limit is not None and value > limit:
                errors.append(f"{name} must be at most {limit}, got {value}")

        # Validate glyphs
        widths = {len(g) for g in self.glyphs.values()}
        if len(widths) != 1:
            errors.append(f"Glyphs must share one width, got {self.glyphs}")
        elif 0 in widths:
            errors.append("Glyphs must not be empty")

        # Validate mode
        valid_modes = ['single', 'sweep']
        if self.mode not in valid_modes:
            errors.append(f"Invalid mode '{self.mode}', must be one of {valid_modes}")

        # Validate sweep sizes
        if self.mode == 'sweep':
            if not self.sizes:
                errors.append("At least one board size must be specified for sweep mode")
            for size in self.sizes:
                if len(size) != 2 or min(size) < 1:
                    errors.append(f"Board size must be a positive (rows, cols) pair, got {size}")

        return errors

    def print_summary(self) -> None:
        """Print configuration summary."""
        def show(value):
            return '(prompt)' if value is None else value

        print("=" * 60)
        print("Configuration Summary")
        print("=" * 60)
        print(f"Mode: {self.mode}")
        if self.mode == 'sweep':
            print(f"Board sizes: {[f'{r}x{c}' for r, c in self.sizes]}")
        else:
            print(f"Board: {show(self.rows)} x {show(self.cols)} "
                  f"(allowed {self.min_size}-{self.max_size})")
            print(f"Start: row {show(self.start_row)}, col {show(self.start_col)}")
            print(f"Show steps: {self.show_steps}")
        print(f"Glyphs: {self.glyph_current} {self.glyph_visited} {self.glyph_unvisited}")
        print(f"Save: {self.save}" + (f" → {self.output_dir}" if self.save else ""))
        print("=" * 60)
