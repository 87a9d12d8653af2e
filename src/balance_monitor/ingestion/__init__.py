"""Remote data acquisition: HTTP transport and the fee and balance sources."""
