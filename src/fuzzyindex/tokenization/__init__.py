"""Big5/ASCII tokenization and frequency aggregation."""
