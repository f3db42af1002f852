"""Database schema DDL for the inventory store."""

TABLE_NAME = "inventory"

# First auto-assigned id is INDEX_START + 1.
INDEX_START = 1000

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS inventory (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT,
    location    TEXT,
    status      TEXT,
    remarks     TEXT
);
"""

# Only seeds the counter when no row exists for the table, so reopening an
# existing store keeps its sequence.
SEQUENCE_INIT = """
INSERT INTO sqlite_sequence (name, seq)
SELECT ?, ?
WHERE NOT EXISTS (SELECT 1 FROM sqlite_sequence WHERE name = ?)
"""

ITEM_COLUMNS = "id, description, location, status, remarks"
