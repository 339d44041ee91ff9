"""Commerce ledger: orders, billing addresses and payment transactions."""
