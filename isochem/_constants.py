from typing import Final, List

# isotopic envelope
DEFAULT_N_PEAKS: Final[int] = 3

# elements logged when the periodic table is built
LOGGED_ELEMENTS: Final[List[str]] = ["C", "H", "O", "N", "P", "S", "Cl"]

# compound tables
NAME: Final[str] = "name"
FORMULA: Final[str] = "formula"
CLASS: Final[str] = "class"
ION_TYPE: Final[str] = "ion type"
MASS: Final[str] = "mass"
LOG_EVERY_N_ROWS: Final[int] = 500
