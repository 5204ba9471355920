"""HTTP middleware for the Pagewise API."""
