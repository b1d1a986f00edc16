"""Section pricing calculators. Each one turns a slice of the order into a ledger fragment."""
