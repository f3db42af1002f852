"""CSV and JSON interchange for inventory items."""
