"""Configuration constants for kitchen inventory counts."""

# Items seeded when no inventory catalog has been saved yet: (id, name, unit)
DEFAULT_ITEMS = [
    ("1", "SALMON", "Kg"),
    ("2", "QUESOS", "Kg"),
    ("3", "PALTAS", "Kg"),
    ("4", "ARROZ", "Kg"),
    ("5", "ALGAS", "Paq"),
    ("6", "LANGO BOLSA", "Un"),
    ("7", "LANGO H", "Un"),
]
