# finance_api/core/constants.py
from typing import Dict, List, Tuple

# Transaction / budget / bill categories
CATEGORIES: List[str] = [
    "Entertainment",
    "Bills",
    "Groceries",
    "Dining Out",
    "Transportation",
    "Personal Care",
    "Education",
    "Lifestyle",
    "Shopping",
    "General",
]

ALL_TRANSACTIONS = "All Transactions"

# Theme colors for budgets and pots (name -> hex)
THEMES: Dict[str, str] = {
    "Green": "#277C78",
    "Yellow": "#F2CDAC",
    "Cyan": "#82C9D7",
    "Navy": "#626070",
    "Red": "#C94736",
    "Purple": "#826CB0",
    "Light Purple": "#AF81BA",
    "Turquoise": "#597C7C",
    "Brown": "#93674F",
    "Magenta": "#934F6F",
    "Blue": "#3F82B2",
    "Navy Grey": "#97A0AC",
    "Army Green": "#7F9161",
    "Gold": "#CAB361",
    "Orange": "#BE6C49",
}
THEME_COLORS: List[str] = list(THEMES.values())

DEFAULT_AVATAR = "/assets/images/avatars/default.jpg"

# Sort option -> (column name, descending)
SORT_OPTIONS: Dict[str, Tuple[str, bool]] = {
    "Latest": ("date", True),
    "Oldest": ("date", False),
    "A to Z": ("name", False),
    "Z to A": ("name", True),
    "Highest": ("amount", True),
    "Lowest": ("amount", False),
}

MAX_AMOUNT = 1_000_000_000
MAX_TRANSFER_AMOUNT = 1_000_000

DUE_SOON_DAYS = 5
