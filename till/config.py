"""
Central Configuration File (SSOT).
"""

# --- Business Rules ---
CURRENCY = "EUR"
CURRENCY_SYMBOLS = {
    "GBP": "£",
    "TRY": "₺",
    "USD": "$",
    "EUR": "€",
}
MINOR_UNIT = "0.01"

# --- Change making ---
MAX_ALTERNATIVES: int = 3

# --- Restocking ---
RESTOCK_THRESHOLD: int = 10
RESTOCK_MINIMUM: int = 50
RESTOCK_MULTIPLIER: int = 2
DEFAULT_MAX_PIECES: int = 100

# Average dispensed value that scores 100% dispense efficiency
EFFICIENCY_REFERENCE_VALUE = "10.00"

# Offsets added to the rounded-up total for cashier quick-tender buttons
QUICK_TENDER_STEPS = (0, 5, 10, 20, 50, 100)

# Default till contents: (value, count, kind, name)
STANDARD_EURO_DENOMINATIONS = (
    ("500.00", 2, "note", "500 Euro"),
    ("200.00", 5, "note", "200 Euro"),
    ("100.00", 10, "note", "100 Euro"),
    ("50.00", 20, "note", "50 Euro"),
    ("20.00", 50, "note", "20 Euro"),
    ("10.00", 50, "note", "10 Euro"),
    ("5.00", 50, "note", "5 Euro"),
    ("2.00", 100, "coin", "2 Euro"),
    ("1.00", 100, "coin", "1 Euro"),
    ("0.50", 100, "coin", "50 Cent"),
    ("0.20", 100, "coin", "20 Cent"),
    ("0.10", 100, "coin", "10 Cent"),
    ("0.05", 100, "coin", "5 Cent"),
    ("0.02", 100, "coin", "2 Cent"),
    ("0.01", 100, "coin", "1 Cent"),
)

# --- Console ---
LOG_LEVEL: str = "INFO"
