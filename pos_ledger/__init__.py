"""Point-of-sale bookkeeping with a double-entry ledger core."""
