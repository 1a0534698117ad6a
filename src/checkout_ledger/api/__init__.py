"""HTTP API for the checkout ledger."""
