"""The six CHONPS elements players collect and spend on synthesis."""

ELEMENT_SYMBOLS = ('C', 'H', 'O', 'N', 'P', 'S')

ELEMENT_NAMES = {
    'C': 'Carbon',
    'H': 'Hydrogen',
    'O': 'Oxygen',
    'N': 'Nitrogen',
    'P': 'Phosphorus',
    'S': 'Sulfur',
}

ELEMENT_COLORS = {
    'C': '#06b6d4',
    'H': '#0d9488',
    'O': '#a855f7',
    'N': '#84cc16',
    'P': '#f59e0b',
    'S': '#ef4444',
}

STARTING_ELEMENTS = {'C': 10, 'H': 15, 'O': 8, 'N': 3, 'P': 2, 'S': 1}


def is_element(symbol) -> bool:
    return symbol in ELEMENT_SYMBOLS


def element_map(**counts) -> dict:
    """Return a full six-symbol mapping, zero-filling missing symbols."""
    unknown = set(counts) - set(ELEMENT_SYMBOLS)
    if unknown:
        raise ValueError(f"Unknown element symbol(s): {sorted(unknown)}")
    return {symbol: int(counts.get(symbol, 0)) for symbol in ELEMENT_SYMBOLS}
