import numpy as np
from typing import Iterator, Sequence, Tuple
from farmstead.components.data_components import PlantType, Tile

# Field offsets within a cell
FIELD_SUNLIGHT = 0
FIELD_WATER = 1
FIELD_PLANT_TYPE = 2
FIELD_PLANT_LEVEL = 3
FIELDS_PER_CELL = 4

MAX_SUNLIGHT = 100
MAX_WATER = 100

_ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]
_DIAGONAL = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

class Grid:
    """
    Per-tile farm state packed into one flat uint8 buffer.

    Cell (row, col) occupies bytes [(row*cols+col)*4, +4) in row-major order:
    sunlight, water, plant type, plant level.
    """
    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.data = np.zeros(rows * cols * FIELDS_PER_CELL, dtype=np.uint8)

    def __len__(self) -> int:
        return self.data.size

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _index(self, field: int, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"Tile ({row}, {col}) outside {self.rows}x{self.cols} grid")
        if not 0 <= field < FIELDS_PER_CELL:
            raise IndexError(f"Unknown field offset {field}")
        return (row * self.cols + col) * FIELDS_PER_CELL + field

    def get(self, field: int, row: int, col: int) -> int:
        return int(self.data[self._index(field, row, col)])

    def set(self, field: int, row: int, col: int, value: int):
        index = self._index(field, row, col)
        if not 0 <= value <= 255:
            raise ValueError(f"Value {value} does not fit in a byte")
        self.data[index] = value

    def get_sunlight(self, row: int, col: int) -> int:
        return self.get(FIELD_SUNLIGHT, row, col)

    def set_sunlight(self, row: int, col: int, value: int):
        self.set(FIELD_SUNLIGHT, row, col, value)

    def get_water(self, row: int, col: int) -> int:
        return self.get(FIELD_WATER, row, col)

    def set_water(self, row: int, col: int, value: int):
        self.set(FIELD_WATER, row, col, value)

    def get_plant_type(self, row: int, col: int) -> PlantType:
        return PlantType(self.get(FIELD_PLANT_TYPE, row, col))

    def set_plant_type(self, row: int, col: int, plant_type: PlantType):
        self.set(FIELD_PLANT_TYPE, row, col, int(plant_type))

    def get_plant_level(self, row: int, col: int) -> int:
        return self.get(FIELD_PLANT_LEVEL, row, col)

    def set_plant_level(self, row: int, col: int, level: int):
        self.set(FIELD_PLANT_LEVEL, row, col, level)

    def clear_plant(self, row: int, col: int):
        self.set_plant_type(row, col, PlantType.NONE)
        self.set_plant_level(row, col, 0)

    def tile(self, row: int, col: int) -> Tile:
        base = self._index(0, row, col)
        sunlight, water, plant_type, level = (int(v) for v in self.data[base:base + FIELDS_PER_CELL])
        return Tile(sunlight=sunlight, water=water, plant_type=PlantType(plant_type), plant_level=level)

    def layer(self, field: int) -> np.ndarray:
        """Writable (rows, cols) view of a single field."""
        if not 0 <= field < FIELDS_PER_CELL:
            raise IndexError(f"Unknown field offset {field}")
        return self.data.reshape(self.rows, self.cols, FIELDS_PER_CELL)[:, :, field]

    def neighbors(self, row: int, col: int, diagonal: bool = True) -> Iterator[Tuple[int, int]]:
        """In-bounds neighbor coordinates, 8-way unless diagonal is False."""
        offsets = _ORTHOGONAL + _DIAGONAL if diagonal else _ORTHOGONAL
        for dr, dc in offsets:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                yield nr, nc

    def count_neighbors(self, row: int, col: int, plant_type: PlantType, diagonal: bool = True) -> int:
        return sum(1 for nr, nc in self.neighbors(row, col, diagonal)
                   if self.get(FIELD_PLANT_TYPE, nr, nc) == plant_type)

    def randomize(self, rng):
        """Fresh field: random sunlight/water in [0, 100], no plants."""
        self.layer(FIELD_SUNLIGHT)[:, :] = rng.integers(0, MAX_SUNLIGHT + 1, size=(self.rows, self.cols))
        self.layer(FIELD_WATER)[:, :] = rng.integers(0, MAX_WATER + 1, size=(self.rows, self.cols))
        self.layer(FIELD_PLANT_TYPE)[:, :] = PlantType.NONE
        self.layer(FIELD_PLANT_LEVEL)[:, :] = 0

    def fill(self, sunlight: int, water: int):
        self.layer(FIELD_SUNLIGHT)[:, :] = sunlight
        self.layer(FIELD_WATER)[:, :] = water

    # --- Snapshots ---

    def clone_all(self) -> bytes:
        return self.data.tobytes()

    def restore_all(self, snapshot: bytes):
        if len(snapshot) != self.data.size:
            raise ValueError(f"Snapshot holds {len(snapshot)} bytes, grid needs {self.data.size}")
        self.data[:] = np.frombuffer(snapshot, dtype=np.uint8)

    @staticmethod
    def bytes_from_list(values: Sequence[int]) -> bytes:
        """Validate a plain integer array and pack it for restore_all."""
        if any(isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255 for v in values):
            raise ValueError("Grid data must contain integers in [0, 255]")
        return bytes(values)
