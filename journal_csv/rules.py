"""
Fixed interchange rules.

The format is single-dialect on purpose; nothing here is negotiated per file.
"""

COLUMNS = (
    "Date",
    "Treatment Type",
    "Administration",
    "Intention",
    "Mood Before",
    "Mood After",
    "Reflections",
    "Music Link URL",
)

DELIMITER = ","
QUOTE = '"'
RECORD_TERMINATOR = "\n"
HEADER = DELIMITER.join(COLUMNS)

TARGET_ENCODING = "utf-8"  # no BOM: the header must match byte-for-byte

# Leading characters that make spreadsheets evaluate a cell as a formula.
FORMULA_TRIGGERS = ("=", "+", "-", "@")
GUARD = "'"

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
